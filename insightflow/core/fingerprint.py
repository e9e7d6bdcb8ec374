"""
Chart Data Fingerprinting & Cache

Content-based keys for memoizing dispatcher output. Keys are derived from
what the rows and the chart configuration contain, never from object
identity:

- Same rows + same configuration -> same key
- Any changed cell, row, column or configuration field -> different key
- Row order is significant (it drives first-seen category order)
"""

from collections import OrderedDict
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
import copy
import hashlib
import json
import logging
import math
import numbers

from insightflow.config import InsightFlowConfig
from insightflow.core.dispatcher import ChartDataDispatcher, ChartInput
from insightflow.core.models import OutputRecord
from insightflow.core.values import CellKind, cell_kind

logger = logging.getLogger(__name__)

# Length of the short hex ID (16 hex chars = 64 bits)
SHORT_ID_LENGTH = 16

NULL_CANONICAL = "__NULL__"
NAN_CANONICAL = "__NAN__"
EMPTY_CANONICAL = "__EMPTY__"


def _normalize_value(value: Any) -> str:
    """
    Normalize a cell to a canonical, type-tagged string.

    ``1``, ``1.5``, ``True`` and ``"1"`` must never collide, so every value
    carries its kind as a prefix.
    """
    if value is None:
        return NULL_CANONICAL
    if isinstance(value, str) and value == "":
        return EMPTY_CANONICAL

    kind = cell_kind(value)
    if kind is CellKind.BOOLEAN:
        return "b:true" if value else "b:false"
    if kind is CellKind.NUMBER:
        if isinstance(value, numbers.Integral):
            return f"i:{int(value):x}"
        try:
            number = float(value)
        except OverflowError:
            return f"r:{value!r}"
        if math.isnan(number):
            return NAN_CANONICAL
        return f"f:{number!r}"
    return f"s:{value}"


def _canonical_row(row: Any) -> Any:
    if isinstance(row, Mapping):
        return sorted((str(key), _normalize_value(value)) for key, value in row.items())
    return _normalize_value(row)


def _to_canonical_json(data: Any) -> str:
    """Deterministic JSON: sorted keys, compact separators."""
    return json.dumps(data, sort_keys=True, separators=(',', ':'), ensure_ascii=True)


def _hash(data: str) -> str:
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def dataset_fingerprint(rows: Sequence[Any]) -> str:
    """
    Content hash of a row set.

    Args:
        rows: Materialized row set

    Returns:
        Full SHA-256 hex digest
    """
    return _hash(_to_canonical_json([_canonical_row(row) for row in rows]))


def chart_fingerprint(chart: ChartInput, config: Optional[InsightFlowConfig] = None) -> str:
    """Content hash of a chart configuration, after normalization."""
    dispatcher = ChartDataDispatcher(config)
    return _hash(_to_canonical_json(dispatcher.to_configuration(chart).to_dict()))


class ChartDataCache:
    """
    LRU cache of dispatcher output keyed by content hashes.

    Callers that version their row sets can pass ``rows_version`` to skip
    hashing the rows on every lookup. Cached records are handed out as deep
    copies, so callers may modify what they receive.
    """

    def __init__(self, config: Optional[InsightFlowConfig] = None):
        """
        Initialize the cache.

        Args:
            config: InsightFlow configuration
        """
        self.config = config or InsightFlowConfig()
        self.cache_config = self.config.cache
        self.dispatcher = ChartDataDispatcher(self.config)
        self._entries: "OrderedDict[Tuple[str, str], List[OutputRecord]]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def make_key(
        self,
        rows: Sequence[Any],
        chart: ChartInput,
        rows_version: Optional[str] = None,
    ) -> Tuple[str, str]:
        """Cache key for a (rows, chart) pair."""
        rows_key = f"v:{rows_version}" if rows_version is not None else dataset_fingerprint(rows)
        chart_key = chart_fingerprint(chart, self.config)
        return rows_key, chart_key

    def get_or_compute(
        self,
        rows: Optional[Sequence[Any]],
        chart: ChartInput,
        rows_version: Optional[str] = None,
    ) -> List[OutputRecord]:
        """
        Return cached chart data, computing and storing it on a miss.

        Args:
            rows: Materialized row set
            chart: Chart configuration
            rows_version: Optional caller-maintained version of ``rows``

        Returns:
            Output records (a private copy)
        """
        rows = rows or []
        if not self.cache_config.enabled:
            return self.dispatcher.dispatch(rows, chart)

        key = self.make_key(rows, chart, rows_version)
        if key in self._entries:
            self.hits += 1
            self._entries.move_to_end(key)
            logger.debug(f"Chart cache hit {key[0][:SHORT_ID_LENGTH]}/{key[1][:SHORT_ID_LENGTH]}")
            return copy.deepcopy(self._entries[key])

        self.misses += 1
        records = self.dispatcher.dispatch(rows, chart)
        self._entries[key] = copy.deepcopy(records)
        while len(self._entries) > max(self.cache_config.max_entries, 0):
            self._entries.popitem(last=False)
        return records

    def clear(self):
        """Drop every cached entry."""
        self._entries.clear()

    def get_statistics(self) -> Dict[str, int]:
        return {"entries": len(self._entries), "hits": self.hits, "misses": self.misses}
