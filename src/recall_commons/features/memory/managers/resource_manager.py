"""Resource memory manager."""

from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...pagination.entities.requests import ListOptions
from ...pagination.entities.responses import ListResult
from ..entities.records import ResourceMemoryItem
from ..entities.requests import ResourceMemoryCreate, ResourceMemoryUpdate
from .memory_manager import MemoryRecordManager


class ResourceMemoryManager(MemoryRecordManager[ResourceMemoryItem, ResourceMemoryCreate, ResourceMemoryUpdate]):
    """Manages documents and files an agent has read."""
    
    record_type = ResourceMemoryItem
    model_name = "ResourceMemoryItem"
    entity_type = EntityType.RESOURCE
    cache_prefix = CacheKeyPrefix.RESOURCE
    id_prefix = "res_item"
    
    async def find_by_resource_type(
        self,
        resource_type: str,
        actor: Optional[ActorContext] = None,
        options: Optional[ListOptions] = None,
    ) -> ListResult[ResourceMemoryItem]:
        return await self.list_where(actor, options, resource_type=resource_type)
