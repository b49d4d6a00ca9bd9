"""Episodic memory manager."""

from datetime import datetime
from typing import List, Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...pagination.entities.requests import MemoryListOptions, SortField, SortOrder
from ..entities.records import EpisodicEvent
from ..entities.requests import EpisodicEventCreate, EpisodicEventUpdate
from .memory_manager import MemoryRecordManager


class EpisodicMemoryManager(MemoryRecordManager[EpisodicEvent, EpisodicEventCreate, EpisodicEventUpdate]):
    """Manages time-stamped events an agent observed."""
    
    record_type = EpisodicEvent
    model_name = "EpisodicEvent"
    entity_type = EntityType.EPISODIC
    cache_prefix = CacheKeyPrefix.EPISODIC
    id_prefix = "ep_mem"
    
    async def get_recent_events(
        self,
        actor: Optional[ActorContext] = None,
        agent_id: Optional[str] = None,
        limit: int = 10,
    ) -> List[EpisodicEvent]:
        """Most recent events by occurrence time."""
        options = MemoryListOptions(
            limit=limit,
            sort=SortField("occurred_at", SortOrder.DESC),
            agent_id=agent_id,
        )
        page = await self.list(actor, options)
        return page.items
    
    async def get_events_in_range(
        self,
        start: datetime,
        end: datetime,
        actor: Optional[ActorContext] = None,
        agent_id: Optional[str] = None,
        limit: int = 50,
    ) -> List[EpisodicEvent]:
        """Events that occurred within ``[start, end]``, oldest first."""
        if start > end:
            raise ValueError("start must not be after end")
        options = MemoryListOptions(
            limit=limit,
            sort=SortField("occurred_at", SortOrder.ASC),
            agent_id=agent_id,
        )
        page = await self.list_where(actor, options, occurred_at={"gte": start, "lte": end})
        return page.items
