"""
InsightFlow - Data Aggregation & Statistical Summarization Engine

Turns tabular rows into chart-ready series (grouped aggregates, box-plot
quartiles, density matrices, set intersections) and per-column statistics.
"""

__version__ = "1.0.0"
__author__ = "InsightFlow Team"

from insightflow.config import InsightFlowConfig
from insightflow.core.dispatcher import process_chart_data
from insightflow.core.column_profiler import profile_columns

__all__ = ["InsightFlowConfig", "process_chart_data", "profile_columns", "__version__"]
