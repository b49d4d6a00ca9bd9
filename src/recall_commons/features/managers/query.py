"""Explicit store filters.

A QueryFilter has one attribute per supported predicate. Combinations that
make no sense are rejected when the filter is built, not ignored when the
store runs it.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

RESERVED_PREDICATES = frozenset({"id", "organization_id", "is_deleted", "created_at", "agent_id"})


@dataclass(frozen=True)
class DateRange:
    """Inclusive creation-time range, either bound may be open."""
    
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    
    def __post_init__(self):
        if self.start and self.end and self.start > self.end:
            raise ValueError("Date range start must not be after its end")
    
    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None
    
    def to_where(self) -> Dict[str, datetime]:
        bounds: Dict[str, datetime] = {}
        if self.start is not None:
            bounds["gte"] = self.start
        if self.end is not None:
            bounds["lte"] = self.end
        return bounds


@dataclass(frozen=True)
class QueryFilter:
    """Store filter composed from actor context and options.
    
    ``None`` on any predicate means the predicate is not applied.
    """
    
    record_id: Optional[str] = None
    organization_id: Optional[str] = None
    is_deleted: Optional[bool] = None
    created_range: Optional[DateRange] = None
    agent_id: Optional[str] = None
    equals: Mapping[str, Any] = field(default_factory=dict, hash=False)
    
    def __post_init__(self):
        shadowed = RESERVED_PREDICATES.intersection(self.equals)
        if shadowed:
            raise ValueError(
                f"Use the explicit predicate instead of equals for: {', '.join(sorted(shadowed))}"
            )
    
    def with_equals(self, **predicates: Any) -> "QueryFilter":
        """Return a copy with extra equality predicates."""
        merged = dict(self.equals)
        merged.update(predicates)
        return replace(self, equals=merged)
    
    def to_where(self) -> Dict[str, Any]:
        """Render the store delegate's where mapping."""
        where: Dict[str, Any] = {}
        if self.record_id is not None:
            where["id"] = self.record_id
        if self.is_deleted is not None:
            where["is_deleted"] = self.is_deleted
        if self.organization_id is not None:
            where["organization_id"] = self.organization_id
        if self.created_range is not None and not self.created_range.is_open:
            where["created_at"] = self.created_range.to_where()
        if self.agent_id is not None:
            where["agent_id"] = self.agent_id
        where.update(self.equals)
        return where
