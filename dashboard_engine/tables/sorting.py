"""
Generic Table Sorting

One comparator for every dashboard table:
- sort by "id": case- and accent-insensitive text order
- sort by any other key: numeric order of metric_accessor(row, key)

Rows whose metric is None (or not finite) always come after rows with a
defined metric, whatever the direction. Ties keep the input order unless a
tie breaker is requested explicitly.
"""

import math
import unicodedata
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_snake

T = TypeVar("T")

ID_KEY = "id"

MetricAccessor = Callable[[Any, str], Optional[float]]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortState(BaseModel):
    """Active sort column and direction of one table"""

    model_config = ConfigDict(frozen=True)

    key: str = "revenue"
    direction: SortDirection = SortDirection.DESC

    def toggled(self, key: str) -> "SortState":
        """Header click: same key flips direction, a new key starts descending"""
        if key == self.key:
            flipped = SortDirection.ASC if self.direction is SortDirection.DESC else SortDirection.DESC
            return SortState(key=key, direction=flipped)
        return SortState(key=key, direction=SortDirection.DESC)

    def indicator(self, key: str) -> str:
        """Header arrow for a column"""
        if key != self.key:
            return ""
        return "▲" if self.direction is SortDirection.ASC else "▼"


def text_sort_key(value: Any) -> str:
    """Accent- and case-folded text ("Ávila" sorts with "avila")"""
    decomposed = unicodedata.normalize("NFKD", "" if value is None else str(value))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def _field(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        if key in row:
            return row[key]
        return row.get(to_snake(key))
    if hasattr(row, key):
        return getattr(row, key)
    return getattr(row, to_snake(key), None)


def default_metric(row: Any, key: str) -> Optional[float]:
    """Read a numeric metric from a mapping or attribute (camelCase or snake_case)"""
    value = _field(row, key)
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _defined(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def sort_rows(
    rows: Sequence[T],
    state: SortState,
    metric_accessor: Optional[MetricAccessor] = None,
    tie_breaker: Optional[Callable[[T], Any]] = None,
) -> List[T]:
    """
    Stable sort of table rows.

    Args:
        rows: Rows exposing an `id` and metric fields
        state: Active sort key and direction
        metric_accessor: (row, key) -> number or None; defaults to field lookup
        tie_breaker: Optional secondary key, always ascending

    Returns:
        New list; the input sequence is not modified
    """
    descending = state.direction is SortDirection.DESC
    ordered = list(rows)
    if tie_breaker is not None:
        ordered.sort(key=tie_breaker)

    if state.key == ID_KEY:
        return sorted(ordered, key=lambda row: text_sort_key(_field(row, ID_KEY)), reverse=descending)

    accessor = metric_accessor or default_metric
    defined, undefined = [], []
    for row in ordered:
        value = accessor(row, state.key)
        if _defined(value):
            defined.append((value, row))
        else:
            undefined.append(row)

    defined.sort(key=lambda pair: pair[0], reverse=descending)
    return [row for _, row in defined] + undefined
