"""Pagination mixins."""

from .repository import CursorPaginationMixin

__all__ = ["CursorPaginationMixin"]
