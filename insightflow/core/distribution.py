"""
Distribution (Quartile) Computer

Five-number summaries per category for box plots.

Quartiles use exclusive halves: for ``n`` sorted values, ``q1`` is the
median of ``values[:n // 2]`` and ``q3`` the median of
``values[ceil(n / 2):]``, so the overall median of an odd-length bucket
belongs to neither half. A single-value bucket uses that value for both
quartiles. ``[1, 2, 3, 4, 5, 6, 7, 8]`` gives ``1, 2.5, 4.5, 6.5, 8``.
"""

from typing import Dict, List, Optional, Sequence
import logging
import math

from insightflow.core.models import OutputRecord

logger = logging.getLogger(__name__)


def median_of(sorted_values: Sequence[float]) -> Optional[float]:
    """Middle element, or mean of the two central elements for even lengths."""
    n = len(sorted_values)
    if n == 0:
        return None
    mid = n // 2
    if n % 2 == 0:
        return (sorted_values[mid - 1] + sorted_values[mid]) / 2
    return sorted_values[mid]


def five_number_summary(values: Sequence[float]) -> Optional[Dict[str, float]]:
    """
    Compute min, q1, median, q3 and max.

    Args:
        values: Numeric values in any order

    Returns:
        Summary dictionary, or None for an empty sequence
    """
    ordered = sorted(values)
    n = len(ordered)
    if n == 0:
        return None

    lower = ordered[: n // 2] or ordered
    upper = ordered[math.ceil(n / 2):] or ordered

    return {
        "min": ordered[0],
        "q1": median_of(lower),
        "median": median_of(ordered),
        "q3": median_of(upper),
        "max": ordered[-1],
    }


class DistributionComputer:
    """Turns grouped numeric buckets into box-plot records."""

    def compute(self, buckets, value_key: str) -> List[OutputRecord]:
        """
        Summarize each bucket's collected values of ``value_key``.

        Buckets without any numeric value are dropped, since no box can be
        drawn for them.
        """
        records = []
        for bucket in buckets:
            accumulator = bucket.series.get(value_key)
            summary = five_number_summary(accumulator.values) if accumulator else None
            if summary is None:
                logger.debug(f"Dropping empty box for '{bucket.label}'")
                continue
            record: OutputRecord = {"name": bucket.label}
            record.update(summary)
            records.append(record)
        return records
