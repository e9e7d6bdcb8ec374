"""
Engine Data Model

Value types shared by the profiler, the sub-computers and the dispatcher:
chart configurations going in, column statistics and output records
coming out.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Any, Mapping, Union
from enum import Enum

# One chart-ready record, e.g. {"name": "North", "revenue": 120.5}
OutputRecord = Dict[str, Any]


class ChartType(Enum):
    """Chart types understood by the dispatcher."""
    BAR = "bar"
    LINE = "line"
    AREA = "area"
    SCATTER = "scatter"
    BUBBLE = "bubble"
    PIE = "pie"
    DOUGHNUT = "doughnut"
    HEATMAP = "heatmap"
    CONTOUR = "contour"
    BOX = "box"
    VENN = "venn"

    @classmethod
    def parse(cls, value: Any) -> Optional["ChartType"]:
        """Resolve a raw type string, None when unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class AggregationType(Enum):
    """Per-bucket reduction functions."""
    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"
    COUNT = "count"

    @classmethod
    def parse(cls, value: Any, default: "AggregationType" = None) -> "AggregationType":
        """Resolve a raw aggregation string, falling back to ``default`` (sum)."""
        if isinstance(value, cls):
            return value
        fallback = default or cls.SUM
        if value is None:
            return fallback
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return fallback


class ColumnKind(Enum):
    """Inferred semantic type of a column."""
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    TEXT = "text"


@dataclass
class ColumnStats:
    """Descriptive statistics snapshot of a single column."""
    column: str
    kind: ColumnKind = ColumnKind.TEXT

    # Counts (valid_count + missing_count == total_count)
    valid_count: int = 0
    missing_count: int = 0
    total_count: int = 0

    # Statistics; mean/median only for numeric columns
    mean: Optional[float] = None
    median: Optional[float] = None
    min_value: Optional[Any] = None
    max_value: Optional[Any] = None

    @property
    def is_numeric(self) -> bool:
        return self.kind == ColumnKind.NUMERIC

    @property
    def missing_ratio(self) -> float:
        """Share of missing cells, 0.0 for an empty column."""
        if self.total_count == 0:
            return 0.0
        return self.missing_count / self.total_count

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, omitting statistics that do not apply."""
        data = {
            "column": self.column,
            "kind": self.kind.value,
            "valid_count": self.valid_count,
            "missing_count": self.missing_count,
            "total_count": self.total_count,
        }
        optional = {
            "mean": self.mean,
            "median": self.median,
            "min": self.min_value,
            "max": self.max_value,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data


@dataclass
class ChartConfiguration:
    """
    One requested chart transformation.

    ``type`` is kept as the raw string so that an unknown chart type can
    travel through to the dispatcher, which answers it with empty output.
    """
    type: str = ChartType.BAR.value
    category_key: Optional[str] = None
    value_keys: List[str] = field(default_factory=list)
    size_key: Optional[str] = None
    aggregation: AggregationType = AggregationType.SUM
    title: Optional[str] = None

    def __post_init__(self):
        self.aggregation = AggregationType.parse(self.aggregation)

    @property
    def chart_type(self) -> Optional[ChartType]:
        return ChartType.parse(self.type)

    @property
    def primary_value_key(self) -> Optional[str]:
        """First requested value column, if any."""
        return self.value_keys[0] if self.value_keys else None

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        default_aggregation: Union[str, AggregationType, None] = None,
    ) -> "ChartConfiguration":
        """
        Build a configuration from editor or tool-call arguments.

        Accepts snake_case field names, the camelCase names used by the
        front end (``xAxisKey``/``yAxisKeys``/``zAxisKey``) and the single
        ``yAxisKey`` argument produced by the chart-generation tool call.

        Args:
            data: Raw configuration mapping
            default_aggregation: Aggregation used when none is given

        Returns:
            Chart configuration
        """
        if not isinstance(data, Mapping):
            data = {}

        def first(*keys):
            for key in keys:
                value = data.get(key)
                if value is not None and value != "":
                    return value
            return None

        value_keys = first("value_keys", "valueKeys", "yAxisKeys")
        if value_keys is None:
            single = first("value_key", "yAxisKey")
            value_keys = [single] if single is not None else []
        elif isinstance(value_keys, str):
            value_keys = [value_keys]
        elif not isinstance(value_keys, Iterable):
            value_keys = []

        category_key = first("category_key", "categoryKey", "xAxisKey")
        size_key = first("size_key", "sizeKey", "zAxisKey")

        return cls(
            type=str(first("type", "chart_type") or ""),
            category_key=str(category_key) if category_key is not None else None,
            value_keys=[str(key) for key in value_keys if key is not None and key != ""],
            size_key=str(size_key) if size_key is not None else None,
            aggregation=AggregationType.parse(
                data.get("aggregation"),
                AggregationType.parse(default_aggregation),
            ),
            title=first("title"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "type": self.type,
            "category_key": self.category_key,
            "value_keys": list(self.value_keys),
            "size_key": self.size_key,
            "aggregation": self.aggregation.value,
            "title": self.title,
        }
