"""Tenancy entities."""

from .records import Organization, Client, User
from .requests import (
    OrganizationCreate,
    OrganizationUpdate,
    ClientCreate,
    ClientUpdate,
    UserCreate,
    UserUpdate,
)

__all__ = [
    "Organization",
    "Client",
    "User",
    "OrganizationCreate",
    "OrganizationUpdate",
    "ClientCreate",
    "ClientUpdate",
    "UserCreate",
    "UserUpdate",
]
