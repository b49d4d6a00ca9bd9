"""Tenancy managers."""

from .organization_manager import OrganizationManager
from .client_manager import ClientManager
from .user_manager import UserManager

__all__ = [
    "OrganizationManager",
    "ClientManager",
    "UserManager",
]
