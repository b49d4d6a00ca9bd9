"""Actor context entity.

This module defines the ActorContext passed to every manager operation to
identify the calling principal and the tenant it acts within.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional


class AccessPermission(str, Enum):
    """Coarse permissions an actor may carry."""
    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    ADMIN = "admin"


@dataclass(frozen=True)
class ActorContext:
    """Calling principal for a manager operation.
    
    Every read, write and list against a tenant-scoped entity is filtered by
    ``organization_id``. The actor ``id`` is recorded as the creating and
    last-modifying principal on writes.
    """
    
    id: str
    organization_id: Optional[str] = None
    user_id: Optional[str] = None
    permissions: FrozenSet[AccessPermission] = field(default_factory=frozenset)
    
    @classmethod
    def for_tenant(
        cls,
        actor_id: str,
        organization_id: str,
        user_id: Optional[str] = None,
        permissions: Iterable[AccessPermission] = (),
    ) -> "ActorContext":
        """Build a context scoped to a single tenant."""
        return cls(
            id=actor_id,
            organization_id=organization_id,
            user_id=user_id,
            permissions=frozenset(permissions),
        )
    
    @property
    def is_tenant_scoped(self) -> bool:
        """Check if the actor carries a tenant identifier."""
        return self.organization_id is not None
    
    def has_permission(self, permission: AccessPermission) -> bool:
        """Check if the actor holds a permission, admins hold all of them."""
        return AccessPermission.ADMIN in self.permissions or permission in self.permissions
