"""Pagination response entities."""

from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class ListResult(Generic[T]):
    """One page of a cursor-paginated listing.
    
    ``total`` counts every record matching the filter, not the page size.
    ``next_cursor`` is set only when ``has_more`` is true.
    """
    
    items: List[T] = field(default_factory=list)
    total: int = 0
    has_more: bool = False
    next_cursor: Optional[str] = None
    
    def __len__(self) -> int:
        return len(self.items)
    
    def map(self, transform: Callable[[T], U]) -> "ListResult[U]":
        """Convert every item, keeping the pagination state."""
        return ListResult(
            items=[transform(item) for item in self.items],
            total=self.total,
            has_more=self.has_more,
            next_cursor=self.next_cursor,
        )
