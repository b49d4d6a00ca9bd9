"""Semantic memory manager."""

from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ..entities.records import SemanticMemoryItem
from ..entities.requests import SemanticMemoryCreate, SemanticMemoryUpdate
from .memory_manager import MemoryRecordManager


class SemanticMemoryManager(MemoryRecordManager[SemanticMemoryItem, SemanticMemoryCreate, SemanticMemoryUpdate]):
    """Manages named concepts and facts."""
    
    record_type = SemanticMemoryItem
    model_name = "SemanticMemoryItem"
    entity_type = EntityType.SEMANTIC
    cache_prefix = CacheKeyPrefix.SEMANTIC
    id_prefix = "sem_item"
    
    async def find_by_name(self, name: str, actor: Optional[ActorContext] = None) -> Optional[SemanticMemoryItem]:
        return await self.find_one(actor, name=name)
