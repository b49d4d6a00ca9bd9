"""Cursor pagination for recall-commons."""

from .entities import SortOrder, SortField, ListOptions, MemoryListOptions, ListResult
from .mixins import CursorPaginationMixin

__all__ = [
    "SortOrder",
    "SortField",
    "ListOptions",
    "MemoryListOptions",
    "ListResult",
    "CursorPaginationMixin",
]
