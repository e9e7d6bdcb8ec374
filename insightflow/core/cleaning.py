"""
Data Cleaning

The column-level cleaning operations the AI assistant can request:
IQR outlier removal, mean imputation and dropping rows with missing values.
Operations never touch the input rows; they return a new row list together
with a short report for the notification layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging
import math

from insightflow.config import InsightFlowConfig
from insightflow.core.values import Number, as_number, cell

logger = logging.getLogger(__name__)


class CleaningOperation(Enum):
    """Supported cleaning operations."""
    REMOVE_OUTLIERS = "remove_outliers"
    IMPUTE_MEAN = "impute_mean"
    DROP_MISSING = "drop_missing"


@dataclass
class CleaningResult:
    """Outcome of one cleaning operation."""
    rows: List[Any]
    operation: CleaningOperation
    column: str
    affected_count: int = 0
    message: str = ""
    fill_value: Optional[Number] = None
    bounds: Optional[Dict[str, float]] = None


class DataCleaner:
    """
    Applies cleaning operations to a single column.

    - remove_outliers: drops rows whose numeric value lies outside
      ``[q1 - k*iqr, q3 + k*iqr]``; non-numeric rows are kept
    - impute_mean: replaces missing and non-numeric cells with the column mean
    - drop_missing: keeps only rows whose value is numeric
    """

    def __init__(self, config: Optional[InsightFlowConfig] = None):
        """
        Initialize the cleaner.

        Args:
            config: InsightFlow configuration
        """
        self.config = config or InsightFlowConfig()
        self.cleaning_config = self.config.cleaning

    def apply(self, rows: Sequence[Any], column: str, operation: Any) -> CleaningResult:
        """
        Run one operation.

        Args:
            rows: Materialized row set
            column: Column to clean
            operation: CleaningOperation or its string value

        Returns:
            Cleaning result with the new rows

        Raises:
            ValueError: If the operation is not supported
        """
        try:
            operation = CleaningOperation(
                operation.value if isinstance(operation, CleaningOperation) else operation
            )
        except ValueError:
            raise ValueError(f"Unsupported cleaning operation: {operation}") from None

        rows = list(rows or [])
        if operation == CleaningOperation.REMOVE_OUTLIERS:
            result = self.remove_outliers(rows, column)
        elif operation == CleaningOperation.IMPUTE_MEAN:
            result = self.impute_mean(rows, column)
        else:
            result = self.drop_missing(rows, column)

        logger.info(result.message)
        return result

    def remove_outliers(self, rows: List[Any], column: str) -> CleaningResult:
        values = sorted(
            number for number in (as_number(cell(row, column)) for row in rows)
            if number is not None
        )

        result = CleaningResult(rows=rows, operation=CleaningOperation.REMOVE_OUTLIERS, column=column)
        if len(values) >= self.cleaning_config.outlier_min_values:
            q1 = values[math.floor(len(values) * 0.25)]
            q3 = values[math.floor(len(values) * 0.75)]
            iqr = q3 - q1
            lower = q1 - self.cleaning_config.outlier_iqr_multiplier * iqr
            upper = q3 + self.cleaning_config.outlier_iqr_multiplier * iqr

            kept = []
            for row in rows:
                number = as_number(cell(row, column))
                if number is None or lower <= number <= upper:
                    kept.append(row)

            result.rows = kept
            result.affected_count = len(rows) - len(kept)
            result.bounds = {"lower": lower, "upper": upper}
        else:
            logger.debug(f"Too few numeric values in '{column}' for outlier removal ({len(values)})")

        result.message = f"Outliers removed. Dropped {result.affected_count} rows."
        return result

    def impute_mean(self, rows: List[Any], column: str) -> CleaningResult:
        numbers = [n for n in (as_number(cell(row, column)) for row in rows) if n is not None]
        mean = round(sum(numbers) / len(numbers), self.cleaning_config.impute_precision) if numbers else 0

        imputed = 0
        cleaned = []
        for row in rows:
            if as_number(cell(row, column)) is None:
                imputed += 1
                base = dict(row) if isinstance(row, Mapping) else {}
                base[column] = mean
                cleaned.append(base)
            else:
                cleaned.append(row)

        return CleaningResult(
            rows=cleaned,
            operation=CleaningOperation.IMPUTE_MEAN,
            column=column,
            affected_count=imputed,
            message=f"Imputed mean ({mean}) for {imputed} missing values in {column}.",
            fill_value=mean,
        )

    def drop_missing(self, rows: List[Any], column: str) -> CleaningResult:
        kept = [row for row in rows if as_number(cell(row, column)) is not None]
        dropped = len(rows) - len(kept)
        return CleaningResult(
            rows=kept,
            operation=CleaningOperation.DROP_MISSING,
            column=column,
            affected_count=dropped,
            message=f"Dropped {dropped} rows with missing values in {column}.",
        )
