"""Base record shared by every entity read and written through a manager."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(kw_only=True)
class BaseRecord:
    """Bookkeeping fields every stored record carries.
    
    The store owns the record lifecycle. A cache tier only ever holds an
    ephemeral copy keyed by ``id``.
    """
    
    id: str
    organization_id: Optional[str] = None
    is_deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by_id: Optional[str] = None
    last_updated_by_id: Optional[str] = None
