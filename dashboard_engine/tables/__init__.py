"""
Table Sorting Module
"""
from .sorting import SortDirection, SortState, default_metric, sort_rows, text_sort_key

__all__ = [
    "SortDirection",
    "SortState",
    "default_metric",
    "sort_rows",
    "text_sort_key",
]
