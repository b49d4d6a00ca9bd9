"""Shared core entities."""

from .context import ActorContext, AccessPermission
from .records import BaseRecord

__all__ = [
    "ActorContext",
    "AccessPermission",
    "BaseRecord",
]
