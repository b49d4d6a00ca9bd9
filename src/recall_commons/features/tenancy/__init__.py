"""Tenancy feature: organizations, client applications and users."""

from .entities import (
    Organization,
    Client,
    User,
    OrganizationCreate,
    OrganizationUpdate,
    ClientCreate,
    ClientUpdate,
    UserCreate,
    UserUpdate,
)
from .managers import OrganizationManager, ClientManager, UserManager

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
    "OrganizationManager",
    "ClientManager",
    "UserManager",
]
