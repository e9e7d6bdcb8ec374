"""Core modules for InsightFlow."""

from insightflow.core.values import CellKind, as_number, as_booleanish, is_missing
from insightflow.core.models import (
    AggregationType,
    ChartConfiguration,
    ChartType,
    ColumnKind,
    ColumnStats,
)
from insightflow.core.column_profiler import ColumnProfiler, profile_columns
from insightflow.core.aggregator import GroupingEngine
from insightflow.core.distribution import DistributionComputer, five_number_summary
from insightflow.core.density import DensityMatrix, DensityMatrixComputer
from insightflow.core.intersection import SetIntersection, SetIntersectionComputer
from insightflow.core.dispatcher import ChartDataDispatcher, process_chart_data
from insightflow.core.fingerprint import ChartDataCache
from insightflow.core.cleaning import CleaningOperation, CleaningResult, DataCleaner

__all__ = [
    "CellKind",
    "as_number",
    "as_booleanish",
    "is_missing",
    "AggregationType",
    "ChartConfiguration",
    "ChartType",
    "ColumnKind",
    "ColumnStats",
    "ColumnProfiler",
    "profile_columns",
    "GroupingEngine",
    "DistributionComputer",
    "five_number_summary",
    "DensityMatrix",
    "DensityMatrixComputer",
    "SetIntersection",
    "SetIntersectionComputer",
    "ChartDataDispatcher",
    "process_chart_data",
    "ChartDataCache",
    "CleaningOperation",
    "CleaningResult",
    "DataCleaner",
]
