"""
Value Coercion

Classifies single cells as numeric, boolean, textual or missing. Every
function here is total: any input maps to a classification, nothing raises.
"""

from enum import Enum
from typing import Any, Mapping, Optional, Union
import math
import numbers
import re

Number = Union[int, float]

DEFAULT_NULL_LABEL = "null"

_DECIMAL_PATTERN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$', re.ASCII)


class CellKind(Enum):
    """Tagged variant of a single cell value."""
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    NULL = "null"


def cell_kind(value: Any) -> CellKind:
    """Classify a raw cell. Booleans are never numbers, empty strings are null."""
    if value is None:
        return CellKind.NULL
    if isinstance(value, bool):
        return CellKind.BOOLEAN
    if isinstance(value, numbers.Real):
        return CellKind.NUMBER
    if isinstance(value, str) and value == "":
        return CellKind.NULL
    return CellKind.TEXT


def cell(row: Any, key: Optional[str]) -> Any:
    """Read one cell; absent keys and non-mapping rows read as None."""
    if key is None or not isinstance(row, Mapping):
        return None
    return row.get(key)


def is_missing(value: Any) -> bool:
    return cell_kind(value) is CellKind.NULL


def as_number(value: Any) -> Optional[Number]:
    """
    Coerce a cell to a finite number.

    Args:
        value: Raw cell value

    Returns:
        The number, or None when the cell is not numeric. Strings must parse
        fully as a decimal literal; NaN and infinities are rejected.
    """
    kind = cell_kind(value)

    if kind is CellKind.NUMBER:
        if isinstance(value, numbers.Integral):
            return int(value)
        number = float(value)
        return number if math.isfinite(number) else None

    if kind is CellKind.TEXT and isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_PATTERN.match(text):
            return None
        number = float(text)
        if not math.isfinite(number):
            return None
        if number.is_integer() and "." not in text and "e" not in text.lower():
            return int(number)
        return number

    return None


def as_booleanish(value: Any) -> bool:
    """True for booleans, the strings "true"/"false" and the numbers 0/1."""
    return as_boolean(value) is not None


def as_boolean(value: Any) -> Optional[bool]:
    """Truth value of a boolean-ish cell, None for anything else."""
    kind = cell_kind(value)

    if kind is CellKind.BOOLEAN:
        return bool(value)
    if kind is CellKind.TEXT:
        if value == "true":
            return True
        if value == "false":
            return False
        return None
    if kind is CellKind.NUMBER:
        if value == 1:
            return True
        if value == 0:
            return False
    return None


def as_text(value: Any) -> str:
    """Display string of a cell, used for labels and lexicographic ordering."""
    kind = cell_kind(value)

    if kind is CellKind.NULL:
        return ""
    if kind is CellKind.BOOLEAN:
        return "true" if value else "false"
    if kind is CellKind.NUMBER:
        if isinstance(value, numbers.Integral):
            return str(int(value))
        number = float(value)
        if math.isfinite(number) and number.is_integer() and abs(number) < 1e16:
            return str(int(number))
        return str(number)
    return str(value)


def category_label(value: Any, null_label: str = DEFAULT_NULL_LABEL) -> str:
    """Grouping label of a cell; missing cells share the null label."""
    if is_missing(value):
        return null_label
    return as_text(value)
