"""Knowledge vault manager."""

from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...pagination.entities.requests import ListOptions
from ...pagination.entities.responses import ListResult
from ..entities.records import KnowledgeItem
from ..entities.requests import KnowledgeItemCreate, KnowledgeItemUpdate
from .memory_manager import MemoryRecordManager


class KnowledgeMemoryManager(MemoryRecordManager[KnowledgeItem, KnowledgeItemCreate, KnowledgeItemUpdate]):
    """Manages credentials, contacts and other structured facts."""
    
    record_type = KnowledgeItem
    model_name = "KnowledgeItem"
    entity_type = EntityType.KNOWLEDGE
    cache_prefix = CacheKeyPrefix.KNOWLEDGE
    id_prefix = "kv_item"
    
    async def find_by_sensitivity(
        self,
        sensitivity: str,
        actor: Optional[ActorContext] = None,
        options: Optional[ListOptions] = None,
    ) -> ListResult[KnowledgeItem]:
        return await self.list_where(actor, options, sensitivity=sensitivity)
