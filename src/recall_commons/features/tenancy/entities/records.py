"""Tenancy records: organizations, client applications and users."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ....core.shared.records import BaseRecord


@dataclass(kw_only=True)
class Organization(BaseRecord):
    """A tenant. Organizations are not themselves tenant-scoped."""
    
    name: str


@dataclass(kw_only=True)
class Client(BaseRecord):
    """A client application acting within an organization."""
    
    name: str
    status: str = "active"
    scope: str = "read_write"
    email: Optional[str] = None
    credits: float = 100.0
    last_login: Optional[datetime] = None


@dataclass(kw_only=True)
class User(BaseRecord):
    """An end user whose memories are managed on behalf of a client."""
    
    name: str
    status: str = "active"
    timezone: str = "UTC"
    is_admin: bool = False
    client_id: Optional[str] = None
    last_self_reflection_time: Optional[datetime] = None
