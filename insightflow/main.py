"""
InsightFlow - Main Entry Point

Command-line interface around the aggregation engine: profile the columns
of a JSON row file, compute chart data, or apply a cleaning operation.
"""

import sys
import json
import logging
from typing import Any, List, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from insightflow import __version__
from insightflow.config import InsightFlowConfig, load_config
from insightflow.core.cleaning import CleaningOperation, DataCleaner
from insightflow.core.column_profiler import ColumnProfiler
from insightflow.core.dispatcher import ChartDataDispatcher
from insightflow.core.explorer import collect_headers, summarize_dataset
from insightflow.core.models import AggregationType, ChartConfiguration, ChartType

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

console = Console()


def load_rows(path: str) -> List[Any]:
    """
    Load an already-typed row set from a JSON file.

    Args:
        path: File holding a JSON array of objects

    Returns:
        Row list
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise click.ClickException(f"{path} must contain a JSON array of row objects")
    return data


def _format_stat(value: Optional[Any]) -> str:
    return "N/A" if value is None else str(value)


@click.group()
@click.version_option(version=__version__, prog_name="InsightFlow")
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, config_path, verbose):
    """InsightFlow - Data Aggregation & Statistical Summarization Engine"""
    config = load_config(config_path)
    if verbose or config.verbose:
        config.verbose = True
        logging.getLogger().setLevel(logging.DEBUG)
    ctx.obj = config


@cli.command()
@click.argument('rows_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--column', '-c', 'columns', multiple=True, help='Column to profile (repeatable)')
@click.option('--json', 'as_json', is_flag=True, help='Print statistics as JSON')
@click.pass_obj
def profile(config: InsightFlowConfig, rows_file, columns, as_json):
    """Profile the columns of a JSON row file."""
    rows = load_rows(rows_file)
    headers = list(columns) or collect_headers(rows)
    stats = ColumnProfiler(config).profile(rows, headers)

    if as_json:
        click.echo(json.dumps([s.to_dict() for s in stats], indent=2))
        return

    console.print(Panel(summarize_dataset(rows, headers), title="Dataset", border_style="blue"))

    table = Table(title="Column Statistics", show_header=True)
    table.add_column("Column", style="cyan")
    table.add_column("Kind")
    table.add_column("Valid", justify="right")
    table.add_column("Missing", justify="right")
    table.add_column("Mean", justify="right")
    table.add_column("Median", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")

    for s in stats:
        table.add_row(
            s.column,
            s.kind.value,
            str(s.valid_count),
            str(s.missing_count),
            _format_stat(s.mean),
            _format_stat(s.median),
            _format_stat(s.min_value),
            _format_stat(s.max_value),
        )

    console.print(table)


@cli.command()
@click.argument('rows_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--type', '-t', 'chart_type', type=click.Choice([t.value for t in ChartType]),
              required=True, help='Chart type')
@click.option('--category', '-x', 'category_key', required=True, help='Category / X-axis column')
@click.option('--value', '-y', 'value_keys', multiple=True, help='Value column (repeatable)')
@click.option('--size', '-z', 'size_key', help='Size column for bubble charts')
@click.option('--aggregation', '-a', type=click.Choice([a.value for a in AggregationType]),
              default=None, help='Aggregation function')
@click.pass_obj
def chart(config: InsightFlowConfig, rows_file, chart_type, category_key, value_keys, size_key,
          aggregation):
    """Compute chart-ready records and print them as JSON."""
    rows = load_rows(rows_file)
    chart_config = ChartConfiguration(
        type=chart_type,
        category_key=category_key,
        value_keys=list(value_keys),
        size_key=size_key,
        aggregation=AggregationType.parse(aggregation or config.grouping.default_aggregation),
    )

    records = ChartDataDispatcher(config).dispatch(rows, chart_config)
    if not records:
        logger.warning("No data available for current configuration")
    click.echo(json.dumps(records, indent=2))


@cli.command()
@click.argument('rows_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--column', '-c', required=True, help='Column to clean')
@click.option('--operation', type=click.Choice([o.value for o in CleaningOperation]),
              required=True, help='Cleaning operation')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write cleaned rows here')
@click.pass_obj
def clean(config: InsightFlowConfig, rows_file, column, operation, output):
    """Apply a cleaning operation to one column."""
    rows = load_rows(rows_file)

    try:
        result = DataCleaner(config).apply(rows, column, operation)
    except ValueError as e:
        console.print(f"[bold red]✗ Error: {e}[/bold red]")
        sys.exit(1)

    payload = json.dumps(result.rows, indent=2)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(payload)
        console.print(f"[bold green]✓ {result.message}[/bold green]")
        console.print(f"  Rows written to {output}")
    else:
        click.echo(payload)


@cli.command()
def version():
    """Show version information."""
    console.print(Panel(
        f"[bold]InsightFlow[/bold] v{__version__}\n\n"
        "Turns tabular rows into chart-ready series and column statistics.\n\n"
        "Components:\n"
        "  • Column Profiler\n"
        "  • Grouping & Aggregation Engine\n"
        "  • Distribution, Density and Set Intersection Computers\n"
        "  • Chart Data Dispatcher",
        title="About",
        border_style="blue"
    ))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
