"""
Grouping & Aggregation Engine

Buckets rows by a category label and reduces one or more value columns per
bucket. Bucket order is the first-seen order of labels in the row
iteration, which becomes the X-axis order of bar, line and area charts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import logging

from insightflow.config import InsightFlowConfig
from insightflow.core.models import AggregationType, OutputRecord
from insightflow.core.values import Number, as_number, category_label, cell

logger = logging.getLogger(__name__)


@dataclass
class SeriesAccumulator:
    """Running reduction state of one value column inside one bucket."""
    total: Number = 0
    valid_count: int = 0
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    values: List[Number] = field(default_factory=list)

    def add(self, value: Any):
        """Fold a raw cell in; missing or non-numeric cells are skipped."""
        number = as_number(value)
        if number is None:
            return

        self.total += number
        self.valid_count += 1
        self.values.append(number)
        if self.minimum is None or number < self.minimum:
            self.minimum = number
        if self.maximum is None or number > self.maximum:
            self.maximum = number

    def reduce(self, aggregation: AggregationType, row_count: int) -> Optional[Number]:
        """
        Reduce to a single number.

        Args:
            aggregation: Reduction function
            row_count: Rows in the owning bucket, used by ``count``

        Returns:
            The aggregate. ``sum`` and ``avg`` give 0 without valid
            contributions; ``min`` and ``max`` give None.
        """
        if aggregation == AggregationType.COUNT:
            return row_count
        if aggregation == AggregationType.AVG:
            return self.total / self.valid_count if self.valid_count else 0
        if aggregation == AggregationType.MIN:
            return self.minimum
        if aggregation == AggregationType.MAX:
            return self.maximum
        return self.total


@dataclass
class Bucket:
    """Rows sharing one category label."""
    label: str
    row_count: int = 0
    series: Dict[str, SeriesAccumulator] = field(default_factory=dict)


class GroupingEngine:
    """
    Groups rows by category and aggregates value columns per group.

    Missing category cells are grouped under the configured null label
    (``"null"`` by default) so renderers can special-case that bucket.
    """

    def __init__(self, config: Optional[InsightFlowConfig] = None):
        self.config = config or InsightFlowConfig()
        self.null_label = self.config.grouping.null_label

    def group(
        self,
        rows: Sequence[Any],
        category_key: str,
        value_keys: Sequence[str] = (),
    ) -> List[Bucket]:
        """
        Bucket rows by category label.

        Args:
            rows: Materialized row set
            category_key: Column providing the labels
            value_keys: Columns accumulated inside every bucket

        Returns:
            Buckets in first-seen label order
        """
        buckets: Dict[str, Bucket] = {}

        for row in rows:
            label = category_label(cell(row, category_key), self.null_label)
            bucket = buckets.get(label)
            if bucket is None:
                bucket = Bucket(label=label)
                bucket.series = {key: SeriesAccumulator() for key in value_keys}
                buckets[label] = bucket

            bucket.row_count += 1
            for key, accumulator in bucket.series.items():
                accumulator.add(cell(row, key))

        logger.debug(f"Grouped {len(rows)} rows by '{category_key}' into {len(buckets)} buckets")
        return list(buckets.values())

    def aggregate(
        self,
        rows: Sequence[Any],
        category_key: str,
        value_keys: Sequence[str] = (),
        aggregation: AggregationType = AggregationType.SUM,
    ) -> List[OutputRecord]:
        """
        Group and reduce.

        With no value keys every bucket reports its row count under
        ``value`` (histogram / pie mode). Otherwise each value key becomes a
        field of the record; ``min``/``max`` fields are left out for buckets
        without any numeric contribution.

        Args:
            rows: Materialized row set
            category_key: Column providing the labels
            value_keys: Columns to reduce
            aggregation: Reduction function

        Returns:
            One record per bucket in first-seen order
        """
        if not value_keys:
            return self.count(rows, category_key)

        records = []
        for bucket in self.group(rows, category_key, value_keys):
            record: OutputRecord = {"name": bucket.label}
            for key, accumulator in bucket.series.items():
                if key == "name":
                    continue
                value = accumulator.reduce(aggregation, bucket.row_count)
                if value is not None:
                    record[key] = value
            records.append(record)

        return records

    def count(self, rows: Sequence[Any], category_key: str) -> List[OutputRecord]:
        """Row count per bucket."""
        return [
            {"name": bucket.label, "value": bucket.row_count}
            for bucket in self.group(rows, category_key)
        ]
