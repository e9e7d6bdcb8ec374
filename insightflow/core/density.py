"""
Density Matrix Computer

Co-occurrence counts between two categorical columns for heatmap and
contour charts. The matrix is sparse: only observed label pairs produce a
cell, so renderers must not assume a dense grid.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from insightflow.config import InsightFlowConfig
from insightflow.core.models import OutputRecord
from insightflow.core.values import category_label, cell

logger = logging.getLogger(__name__)


@dataclass
class DensityMatrix:
    """Sparse count matrix plus the global count range for color scales."""
    cells: List[OutputRecord] = field(default_factory=list)
    row_labels: List[str] = field(default_factory=list)
    column_labels: List[str] = field(default_factory=list)
    min_value: int = 0
    max_value: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.cells


class DensityMatrixComputer:
    """Counts (row label, column label) pairs in a single pass."""

    def __init__(self, config: Optional[InsightFlowConfig] = None):
        self.config = config or InsightFlowConfig()
        self.null_label = self.config.grouping.null_label

    def compute(self, rows: Sequence[Any], row_key: str, column_key: str) -> DensityMatrix:
        """
        Build the density matrix.

        Args:
            rows: Materialized row set
            row_key: Column providing ``x`` labels
            column_key: Column providing ``y`` labels

        Returns:
            Matrix whose cells are ordered by first-seen row label, then
            first-seen column label
        """
        row_order: Dict[str, int] = {}
        column_order: Dict[str, int] = {}
        counts: Dict[Tuple[str, str], int] = {}

        for row in rows:
            x = category_label(cell(row, row_key), self.null_label)
            y = category_label(cell(row, column_key), self.null_label)
            row_order.setdefault(x, len(row_order))
            column_order.setdefault(y, len(column_order))
            counts[(x, y)] = counts.get((x, y), 0) + 1

        pairs = sorted(counts, key=lambda pair: (row_order[pair[0]], column_order[pair[1]]))
        matrix = DensityMatrix(
            cells=[{"x": x, "y": y, "value": counts[(x, y)]} for x, y in pairs],
            row_labels=list(row_order),
            column_labels=list(column_order),
        )
        if counts:
            matrix.min_value = min(counts.values())
            matrix.max_value = max(counts.values())

        logger.debug(
            f"Density matrix '{row_key}' x '{column_key}': {len(matrix.cells)} cells, "
            f"range {matrix.min_value}..{matrix.max_value}"
        )
        return matrix
