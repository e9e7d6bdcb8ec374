"""
Data Explorer

Helpers behind the data table view: header discovery, per-column distinct
values for filter menus, search/filter of rows, and the one-line dataset
summary handed to the AI assistant as context.
"""

from typing import Any, Collection, Dict, List, Mapping, Optional, Sequence, Tuple
import json
import logging

from insightflow.core.values import CellKind, as_text, cell, cell_kind

logger = logging.getLogger(__name__)

NO_DATA_SUMMARY = "No data uploaded yet."


def _identity(value: Any) -> Tuple[CellKind, Any]:
    """Equality key that keeps True apart from 1 and 0.0 apart from False."""
    return cell_kind(value), value


def _display(value: Any) -> str:
    return "null" if value is None else as_text(value)


def collect_headers(rows: Sequence[Any]) -> List[str]:
    """Column names in first-seen order across all rows."""
    headers: Dict[str, None] = {}
    for row in rows:
        if isinstance(row, Mapping):
            for key in row:
                headers.setdefault(key, None)
    return list(headers)


def unique_column_values(
    rows: Sequence[Any],
    headers: Optional[Sequence[str]] = None,
) -> Dict[str, List[Any]]:
    """
    Distinct values per column, sorted by display text.

    Args:
        rows: Materialized row set
        headers: Columns to scan; defaults to every column

    Returns:
        Mapping of column name to its distinct values
    """
    if headers is None:
        headers = collect_headers(rows)

    result = {}
    for header in headers:
        seen = {}
        for row in rows:
            value = cell(row, header)
            try:
                seen.setdefault(_identity(value), value)
            except TypeError:
                seen.setdefault((CellKind.TEXT, as_text(value)), value)
        result[header] = sorted(seen.values(), key=_display)
    return result


def _matches_search(row: Any, headers: Sequence[str], term: str) -> bool:
    return any(term in _display(cell(row, header)).lower() for header in headers)


def _matches_filters(row: Any, filters: Dict[str, set]) -> bool:
    for column, allowed in filters.items():
        if not allowed:
            continue
        try:
            if _identity(cell(row, column)) not in allowed:
                return False
        except TypeError:
            return False
    return True


def filter_rows(
    rows: Sequence[Any],
    headers: Optional[Sequence[str]] = None,
    search_term: str = "",
    column_filters: Optional[Mapping[str, Collection[Any]]] = None,
) -> List[Any]:
    """
    Filter rows by a global search term and per-column value selections.

    Args:
        rows: Materialized row set
        headers: Columns searched by ``search_term``; defaults to every column
        search_term: Case-insensitive substring; empty matches every row
        column_filters: Allowed values per column; an empty selection
            leaves that column unfiltered

    Returns:
        Matching rows in their original order
    """
    if headers is None:
        headers = collect_headers(rows)

    term = (search_term or "").lower()
    filters = {
        column: {_identity(value) for value in values}
        for column, values in (column_filters or {}).items()
    }

    matched = [
        row for row in rows
        if (not term or _matches_search(row, headers, term)) and _matches_filters(row, filters)
    ]
    logger.debug(f"Filtered {len(rows)} rows down to {len(matched)}")
    return matched


def summarize_dataset(rows: Sequence[Any], headers: Optional[Sequence[str]] = None) -> str:
    """One-line dataset description used as AI assistant context."""
    if not rows:
        return NO_DATA_SUMMARY
    if headers is None:
        headers = collect_headers(rows)

    sample = json.dumps(rows[0], default=str, ensure_ascii=False)
    return f"Dataset has {len(rows)} rows. Columns: {', '.join(headers)}. Sample Row: {sample}"
