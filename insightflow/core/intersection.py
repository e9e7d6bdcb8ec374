"""
Set Intersection Computer

Exclusive and overlapping membership counts for Venn diagrams.

A row belongs to a set when its cell is boolean-ish and true: ``True``,
the string ``"true"`` or the number ``1``. Every other value, including
missing cells and arbitrary text, means "not a member".
"""

from dataclasses import dataclass
from typing import Any, List, Sequence
import logging

from insightflow.core.models import OutputRecord
from insightflow.core.values import as_boolean, cell

logger = logging.getLogger(__name__)


def is_member(value: Any) -> bool:
    return as_boolean(value) is True


@dataclass
class SetIntersection:
    """Membership counts of two sets over one row set."""
    only_a: int = 0
    only_b: int = 0
    both: int = 0
    neither: int = 0

    def to_records(self) -> List[OutputRecord]:
        """The three Venn regions, always in A, B, Intersection order."""
        return [
            {"name": "A", "value": self.only_a},
            {"name": "B", "value": self.only_b},
            {"name": "Intersection", "value": self.both},
        ]


class SetIntersectionComputer:

    def compute(self, rows: Sequence[Any], key_a: str, key_b: str) -> SetIntersection:
        counts = SetIntersection()

        for row in rows:
            in_a = is_member(cell(row, key_a))
            in_b = is_member(cell(row, key_b))
            if in_a and in_b:
                counts.both += 1
            elif in_a:
                counts.only_a += 1
            elif in_b:
                counts.only_b += 1
            else:
                counts.neither += 1

        logger.debug(f"Venn '{key_a}'/'{key_b}': {counts}")
        return counts
