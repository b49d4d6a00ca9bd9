"""Pagination entities."""

from .requests import SortOrder, SortField, ListOptions, MemoryListOptions
from .responses import ListResult

__all__ = [
    "SortOrder",
    "SortField",
    "ListOptions",
    "MemoryListOptions",
    "ListResult",
]
