"""Pagination request entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from ....config.constants import PaginationDefaults


class SortOrder(str, Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortField:
    """Stable sort key for cursor pagination."""
    
    field: str = PaginationDefaults.DEFAULT_SORT_FIELD
    order: SortOrder = SortOrder.DESC
    
    def __post_init__(self):
        if not self.field:
            raise ValueError("Sort field is required")


@dataclass(frozen=True)
class ListOptions:
    """Cursor pagination and filtering options for list operations.
    
    ``cursor`` is the id of the last record of the previous page and is
    excluded from the next page.
    """
    
    cursor: Optional[str] = None
    limit: int = PaginationDefaults.DEFAULT_LIMIT
    sort: SortField = field(default_factory=SortField)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    include_deleted: bool = False
    
    def __post_init__(self):
        """Validate pagination parameters."""
        if self.limit < 1:
            raise ValueError("Limit must be at least 1")
        if self.limit > PaginationDefaults.MAX_LIMIT:
            raise ValueError(f"Limit cannot exceed {PaginationDefaults.MAX_LIMIT}")
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")


@dataclass(frozen=True)
class MemoryListOptions(ListOptions):
    """List options for memory records, optionally scoped to one agent."""
    
    agent_id: Optional[str] = None
    
    @classmethod
    def for_agent(cls, agent_id: Optional[str], options: Optional[ListOptions] = None) -> "MemoryListOptions":
        """Narrow existing list options to one agent."""
        options = options or ListOptions()
        return cls(
            cursor=options.cursor,
            limit=options.limit,
            sort=options.sort,
            start_date=options.start_date,
            end_date=options.end_date,
            include_deleted=options.include_deleted,
            agent_id=agent_id,
        )
