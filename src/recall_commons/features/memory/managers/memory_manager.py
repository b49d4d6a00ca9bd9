"""Common base for memory record managers."""

from typing import Optional, TypeVar

from ....core.shared.context import ActorContext
from ...cache.entities.config import TTLPolicy
from ...cache.entities.protocols import CacheTier
from ...cache.services.cache_metrics import CacheMetrics
from ...managers.base_memory_manager import BaseMemoryManager
from ...managers.document_cache import DocumentCacheMixin
from ...managers.protocols import StoreDelegate

T = TypeVar("T")
CreateT = TypeVar("CreateT")
UpdateT = TypeVar("UpdateT")


class MemoryRecordManager(DocumentCacheMixin, BaseMemoryManager[T, CreateT, UpdateT]):
    """Store-only memory manager with opt-in document caching.
    
    Plain ``read`` never touches the cache. ``read_cached`` is for call
    sites that re-read the same record often enough to pay for caching its
    vectors. Writes always drop a cached copy.
    """
    
    def __init__(
        self,
        delegate: StoreDelegate,
        cache: Optional[CacheTier] = None,
        ttl_policy: Optional[TTLPolicy] = None,
        metrics: Optional[CacheMetrics] = None,
    ):
        super().__init__(delegate)
        self.configure_cache(cache, ttl_policy, metrics)
    
    async def read_cached(self, record_id: str, actor: Optional[ActorContext] = None) -> T:
        cached = await self.get_cached(record_id, lambda record: self.is_visible(record, actor))
        if cached is not None:
            return cached
        record = await self.read(record_id, actor)
        await self.cache_record(record)
        return record
    
    async def update(self, record_id: str, patch: UpdateT, actor: Optional[ActorContext] = None) -> T:
        record = await super().update(record_id, patch, actor)
        await self.evict_cached(record_id)
        return record
    
    async def delete(self, record_id: str, actor: Optional[ActorContext] = None) -> T:
        record = await super().delete(record_id, actor)
        await self.evict_cached(record_id)
        return record
    
    async def hard_delete(self, record_id: str, actor: Optional[ActorContext] = None) -> T:
        record = await super().hard_delete(record_id, actor)
        await self.evict_cached(record_id)
        return record
