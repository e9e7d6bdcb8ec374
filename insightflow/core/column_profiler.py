"""
Column Profiler

Infers a semantic kind for each column and computes its descriptive
statistics: counts, mean, median and extremes.
"""

from typing import Any, Dict, List, Optional, Sequence
import logging

from insightflow.config import InsightFlowConfig
from insightflow.core.distribution import median_of
from insightflow.core.explorer import collect_headers
from insightflow.core.models import ColumnKind, ColumnStats
from insightflow.core.values import as_booleanish, as_number, as_text, cell, is_missing

logger = logging.getLogger(__name__)


class ColumnProfiler:
    """
    Computes a ColumnStats snapshot per column.

    Kind inference follows a fixed priority:
    - numeric when more than half of the valid values coerce to numbers
    - boolean when every valid value is boolean-ish
    - text otherwise (including columns with no valid values)
    """

    def __init__(self, config: Optional[InsightFlowConfig] = None):
        """
        Initialize the column profiler.

        Args:
            config: InsightFlow configuration
        """
        self.config = config or InsightFlowConfig()
        self.profiling_config = self.config.profiling

    def profile(
        self,
        rows: Sequence[Any],
        headers: Optional[Sequence[str]] = None,
    ) -> List[ColumnStats]:
        """
        Profile every column of a row set.

        Args:
            rows: Materialized row set
            headers: Column order; defaults to first-seen key order

        Returns:
            One ColumnStats per header, in header order
        """
        if headers is None:
            headers = collect_headers(rows)

        stats = [self.profile_column(rows, header) for header in headers]
        logger.debug(f"Profiled {len(stats)} columns over {len(rows)} rows")
        return stats

    def profile_column(self, rows: Sequence[Any], column: str) -> ColumnStats:
        """
        Profile a single column.

        Args:
            rows: Materialized row set
            column: Column name

        Returns:
            Column statistics; an empty column yields zero counts and no statistics
        """
        all_values = [cell(row, column) for row in rows]
        valid_values = [value for value in all_values if not is_missing(value)]

        stats = ColumnStats(
            column=column,
            valid_count=len(valid_values),
            missing_count=len(all_values) - len(valid_values),
            total_count=len(all_values),
        )

        if not valid_values:
            return stats

        numeric_values = [n for n in (as_number(v) for v in valid_values) if n is not None]
        stats.kind = self._infer_kind(valid_values, numeric_values)

        if stats.kind == ColumnKind.NUMERIC:
            self._fill_numeric_stats(stats, numeric_values)
        else:
            ordered = sorted(as_text(value) for value in valid_values)
            stats.min_value = ordered[0]
            stats.max_value = ordered[-1]

        return stats

    def _infer_kind(self, valid_values: List[Any], numeric_values: List[float]) -> ColumnKind:
        """Apply the numeric > boolean > text priority."""
        share = len(numeric_values) / len(valid_values)
        if numeric_values and share > self.profiling_config.numeric_majority_threshold:
            return ColumnKind.NUMERIC
        if all(as_booleanish(value) for value in valid_values):
            return ColumnKind.BOOLEAN
        return ColumnKind.TEXT

    def _fill_numeric_stats(self, stats: ColumnStats, numeric_values: List[float]):
        """Populate mean, median and extremes from the coercible values."""
        ordered = sorted(numeric_values)
        low, high = ordered[0], ordered[-1]

        mean = round(sum(ordered) / len(ordered), self.profiling_config.mean_precision)
        # Rounding can push the mean just past an extreme (e.g. [1.005])
        stats.mean = min(max(mean, low), high)
        stats.median = median_of(ordered)
        stats.min_value = low
        stats.max_value = high


def profile_columns(
    rows: Sequence[Any],
    headers: Optional[Sequence[str]] = None,
    config: Optional[InsightFlowConfig] = None,
) -> List[Dict[str, Any]]:
    """Profile a row set and return plain dictionaries for column stat cards."""
    return [stats.to_dict() for stats in ColumnProfiler(config).profile(rows, headers)]
