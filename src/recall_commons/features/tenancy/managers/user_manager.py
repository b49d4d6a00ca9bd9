"""User manager."""

from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...managers.base_manager import BaseManager
from ...pagination.entities.requests import ListOptions
from ...pagination.entities.responses import ListResult
from ..entities.records import User
from ..entities.requests import UserCreate, UserUpdate


class UserManager(BaseManager[User, UserCreate, UserUpdate]):
    """Manages end users."""
    
    record_type = User
    model_name = "User"
    entity_type = EntityType.USER
    cache_prefix = CacheKeyPrefix.USER
    id_prefix = "user"
    
    async def find_by_client(
        self,
        client_id: str,
        actor: Optional[ActorContext] = None,
        options: Optional[ListOptions] = None,
    ) -> ListResult[User]:
        return await self.list_where(actor, options, client_id=client_id)
