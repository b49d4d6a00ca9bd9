"""Procedural memory manager."""

from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...pagination.entities.requests import ListOptions
from ...pagination.entities.responses import ListResult
from ..entities.records import ProceduralMemoryItem
from ..entities.requests import ProceduralMemoryCreate, ProceduralMemoryUpdate
from .memory_manager import MemoryRecordManager


class ProceduralMemoryManager(
    MemoryRecordManager[ProceduralMemoryItem, ProceduralMemoryCreate, ProceduralMemoryUpdate]
):
    """Manages step-by-step workflows."""
    
    record_type = ProceduralMemoryItem
    model_name = "ProceduralMemoryItem"
    entity_type = EntityType.PROCEDURAL
    cache_prefix = CacheKeyPrefix.PROCEDURAL
    id_prefix = "proc_item"
    
    async def find_by_entry_type(
        self,
        entry_type: str,
        actor: Optional[ActorContext] = None,
        options: Optional[ListOptions] = None,
    ) -> ListResult[ProceduralMemoryItem]:
        return await self.list_where(actor, options, entry_type=entry_type)
