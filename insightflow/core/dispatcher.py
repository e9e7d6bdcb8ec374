"""
Chart Data Dispatcher

Public entry point of the engine: given rows and a chart configuration,
routes to the matching sub-computer and returns the records a renderer
consumes. Dispatch is total; anything it cannot serve degrades to an empty
list so the UI can show a "no data" state.
"""

from typing import Any, List, Mapping, Optional, Sequence, Union
import logging

from insightflow.config import InsightFlowConfig
from insightflow.core.aggregator import GroupingEngine
from insightflow.core.density import DensityMatrixComputer
from insightflow.core.distribution import DistributionComputer
from insightflow.core.intersection import SetIntersectionComputer
from insightflow.core.models import ChartConfiguration, ChartType, OutputRecord
from insightflow.core.values import as_number, category_label, cell

logger = logging.getLogger(__name__)

AGGREGATED_TYPES = {
    ChartType.BAR,
    ChartType.LINE,
    ChartType.AREA,
    ChartType.PIE,
    ChartType.DOUGHNUT,
}
POINT_TYPES = {ChartType.SCATTER, ChartType.BUBBLE}
DENSITY_TYPES = {ChartType.HEATMAP, ChartType.CONTOUR}

ChartInput = Union[ChartConfiguration, Mapping[str, Any]]


class ChartDataDispatcher:
    """
    Routes a (rows, chart) pair to the right computation.

    - bar, line, area, pie, doughnut: grouped aggregates
    - scatter, bubble: one point per row with numeric x / y (/ z)
    - box: five-number summaries of the first value key
    - heatmap, contour: density matrix of category key x first value key
    - venn: set intersection of category key and first value key
    """

    def __init__(self, config: Optional[InsightFlowConfig] = None):
        """
        Initialize the dispatcher and its sub-computers.

        Args:
            config: InsightFlow configuration
        """
        self.config = config or InsightFlowConfig()
        self.grouping = GroupingEngine(self.config)
        self.distribution = DistributionComputer()
        self.density = DensityMatrixComputer(self.config)
        self.intersection = SetIntersectionComputer()

    def to_configuration(self, chart: ChartInput) -> ChartConfiguration:
        """Accept either a ChartConfiguration or raw editor/tool-call arguments."""
        if isinstance(chart, ChartConfiguration):
            return chart
        return ChartConfiguration.from_dict(
            chart, default_aggregation=self.config.grouping.default_aggregation
        )

    def dispatch(self, rows: Optional[Sequence[Any]], chart: ChartInput) -> List[OutputRecord]:
        """
        Compute chart data.

        Args:
            rows: Materialized row set
            chart: Chart configuration

        Returns:
            Output records in final render order; empty when the request
            cannot be served
        """
        if not rows:
            return []

        try:
            return self._dispatch(rows, self.to_configuration(chart))
        except Exception:
            logger.exception("Unexpected error while computing chart data")
            return []

    def _dispatch(self, rows: Sequence[Any], chart: ChartConfiguration) -> List[OutputRecord]:
        chart_type = chart.chart_type
        if chart_type is None:
            logger.warning(f"Unknown chart type '{chart.type}'")
            return []
        if not chart.category_key:
            logger.warning(f"Chart '{chart_type.value}' has no category key")
            return []

        if chart_type in AGGREGATED_TYPES:
            return self.grouping.aggregate(
                rows, chart.category_key, chart.value_keys, chart.aggregation
            )

        value_key = chart.primary_value_key
        if value_key is None:
            logger.warning(f"Chart '{chart_type.value}' requires a value key")
            return []

        if chart_type in POINT_TYPES:
            size_key = chart.size_key if chart_type == ChartType.BUBBLE else None
            return self._points(rows, chart.category_key, value_key, size_key)

        if chart_type == ChartType.BOX:
            buckets = self.grouping.group(rows, chart.category_key, [value_key])
            return self.distribution.compute(buckets, value_key)

        if chart_type in DENSITY_TYPES:
            return self.density.compute(rows, chart.category_key, value_key).cells

        return self.intersection.compute(rows, chart.category_key, value_key).to_records()

    def _points(
        self,
        rows: Sequence[Any],
        x_key: str,
        y_key: str,
        size_key: Optional[str] = None,
    ) -> List[OutputRecord]:
        """Map rows to points, skipping rows whose coordinates are not numeric."""
        points = []
        for row in rows:
            x = as_number(cell(row, x_key))
            y = as_number(cell(row, y_key))
            if x is None or y is None:
                continue

            point: OutputRecord = {
                "name": category_label(cell(row, x_key), self.config.grouping.null_label),
                "x": x,
                "y": y,
            }
            if size_key:
                z = as_number(cell(row, size_key))
                if z is None:
                    continue
                point["z"] = z
            points.append(point)

        dropped = len(rows) - len(points)
        if dropped:
            logger.debug(f"Dropped {dropped} rows without numeric coordinates")
        return points


def process_chart_data(
    rows: Optional[Sequence[Any]],
    chart: ChartInput,
    config: Optional[InsightFlowConfig] = None,
) -> List[OutputRecord]:
    """Compute chart-ready records for ``rows`` under ``chart``."""
    return ChartDataDispatcher(config).dispatch(rows, chart)
