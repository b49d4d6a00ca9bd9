"""Generic cache-aside manager.

Implements create, read, update, delete, hard delete, list and count once
for every entity. The store is authoritative. The cache tier holds an
ephemeral copy that is populated on read, refreshed on update and removed on
delete. Cache failures are logged and counted, never raised.
"""

import logging
from abc import ABC
from typing import Any, Callable, ClassVar, Dict, Generic, Iterable, List, Optional, TypeVar

from ...core.exceptions import EntityNotFoundError
from ...core.shared.context import ActorContext
from ..cache.entities.config import CacheConfig, CacheRepresentation, TTLPolicy
from ..cache.entities.protocols import CacheTier
from ..cache.serializers.record_serializer import from_document, from_flat, to_document, to_flat
from ..cache.services.cache_metrics import CacheMetrics
from ..pagination.entities.requests import ListOptions
from ..pagination.entities.responses import ListResult
from ..pagination.mixins.repository import CursorPaginationMixin
from .mixins import ActorScopedMixin
from .protocols import StoreDelegate

logger = logging.getLogger(__name__)

T = TypeVar("T")
CreateT = TypeVar("CreateT")
UpdateT = TypeVar("UpdateT")


class BaseManager(ActorScopedMixin, CursorPaginationMixin, ABC, Generic[T, CreateT, UpdateT]):
    """Cache-aside CRUD manager.

    Subclasses declare the record type, the entity type used to look up the
    TTL, the cache key prefix and the cache representation::

        class ClientManager(BaseManager[Client, ClientCreate, ClientUpdate]):
            record_type = Client
            model_name = "Client"
            entity_type = EntityType.CLIENT
            cache_prefix = CacheKeyPrefix.CLIENT
    """

    entity_type: ClassVar[str]
    cache_prefix: ClassVar[str] = ""
    cache_enabled: ClassVar[bool] = True
    cache_representation: ClassVar[CacheRepresentation] = CacheRepresentation.FLAT

    def __init__(
        self,
        delegate: StoreDelegate,
        cache: Optional[CacheTier] = None,
        ttl_policy: Optional[TTLPolicy] = None,
        metrics: Optional[CacheMetrics] = None,
        cache_config: Optional[CacheConfig] = None,
    ):
        self.delegate = delegate
        self.cache = cache
        self.metrics = metrics or CacheMetrics()
        self.cache_config = cache_config or self.default_cache_config(ttl_policy or TTLPolicy())

    @classmethod
    def default_cache_config(cls, ttl_policy: TTLPolicy) -> CacheConfig:
        entity_type = getattr(cls.entity_type, "value", cls.entity_type)
        return CacheConfig(
            prefix=cls.cache_prefix,
            ttl=ttl_policy.ttl_for(entity_type),
            enabled=cls.cache_enabled,
            representation=cls.cache_representation,
        )

    # Cache helpers

    def cache_key(self, record_id: str) -> str:
        return self.cache_config.key(record_id)

    def _cache_usable(self) -> bool:
        if self.cache is None or not self.cache_config.is_active:
            return False
        if not self.cache.is_ready:
            self.metrics.record_bypass()
            return False
        return True

    async def _cache_get(
        self, record_id: str, accept: Optional[Callable[[T], bool]] = None
    ) -> Optional[T]:
        """Read a record from the cache, any failure counts as a miss.

        An entry rejected by ``accept`` is reported and counted as a miss.
        """
        if not self._cache_usable():
            return None
        key = self.cache_key(record_id)
        try:
            if self.cache_config.representation == CacheRepresentation.DOCUMENT:
                data = await self.cache.get_document(key)
                record = from_document(data, self.record_type) if data else None
            else:
                data = await self.cache.get_flat(key)
                record = from_flat(data, self.record_type) if data else None
        except Exception as e:
            self.metrics.record_read_failure()
            logger.warning(f"Cache read failed for {key}, falling back to store: {e}")
            return None

        if record is None or (accept is not None and not accept(record)):
            self.metrics.record_miss()
            return None
        self.metrics.record_hit()
        return record

    async def _cache_put(self, record: T) -> bool:
        """Write a record to the cache, best effort."""
        if getattr(record, "is_deleted", False) or not self._cache_usable():
            return False
        key = self.cache_key(record.id)
        try:
            if self.cache_config.representation == CacheRepresentation.DOCUMENT:
                await self.cache.set_document(key, to_document(record), self.cache_config.ttl)
            else:
                await self.cache.set_flat(key, to_flat(record), self.cache_config.ttl)
        except Exception as e:
            self.metrics.record_write_failure()
            logger.warning(f"Cache write failed for {key}: {e}")
            return False
        self.metrics.record_write()
        return True

    async def _cache_evict(self, record_id: str) -> None:
        """Remove a cache entry, best effort.

        Eviction ignores readiness so a recovering tier still drops stale
        entries.
        """
        if self.cache is None or not self.cache_config.enabled:
            return
        key = self.cache_key(record_id)
        try:
            await self.cache.delete(key)
        except Exception as e:
            self.metrics.record_eviction_failure()
            logger.warning(f"Cache eviction failed for {key}: {e}")
            return
        self.metrics.record_eviction()

    async def _cache_refresh(self, record: T) -> None:
        """Refresh after a write, evicting if the new value cannot be stored."""
        if not await self._cache_put(record) and self.cache_config.is_active:
            await self._cache_evict(record.id)

    async def invalidate(self, record_id: str) -> None:
        """Drop a record's cache entry."""
        await self._cache_evict(record_id)

    async def invalidate_many(self, record_ids: Iterable[str]) -> int:
        """Drop several cache entries in one command, returning how many existed."""
        if self.cache is None or not self.cache_config.enabled:
            return 0
        keys = [self.cache_key(record_id) for record_id in record_ids]
        try:
            removed = await self.cache.delete_many(keys)
        except Exception as e:
            self.metrics.record_eviction_failure()
            logger.warning(f"Bulk cache eviction failed for {len(keys)} {self.model_name} keys: {e}")
            return 0
        self.metrics.evictions += removed
        return removed

    async def purge_cache(self) -> int:
        """Drop every cache entry of this entity type, returning how many were removed."""
        if self.cache is None or not self.cache_config.enabled:
            return 0
        removed = 0
        try:
            async for keys in self.cache.scan(self.cache_config.pattern()):
                removed += await self.cache.delete_many(keys)
        except Exception as e:
            self.metrics.record_eviction_failure()
            logger.warning(f"Cache purge of {self.model_name} stopped after {removed} keys: {e}")
        self.metrics.evictions += removed
        logger.info(f"Purged {removed} cached {self.model_name} records")
        return removed

    # Operations

    async def create(self, payload: CreateT, actor: Optional[ActorContext] = None) -> T:
        """Insert a record and populate the cache."""
        data = self.prepare_create_data(self.input_to_dict(payload), actor)
        logger.debug(f"Creating {self.model_name} {data['id']}")

        with self.store_errors("create", data["id"]):
            row = await self.delegate.create(data)

        record = self.to_record(row)
        await self._cache_put(record)
        logger.info(f"Created {self.model_name} {record.id}")
        return record

    async def read(
        self,
        record_id: str,
        actor: Optional[ActorContext] = None,
        include_deleted: bool = False,
    ) -> T:
        """Read a record through the cache.

        A cache hit that the actor may not see falls through to the store,
        which then answers with the scoped result.

        Raises:
            EntityNotFoundError: If the record is absent or invisible to the actor
        """
        cached = await self._cache_get(
            record_id, lambda record: self.is_visible(record, actor, include_deleted)
        )
        if cached is not None:
            return cached

        where = self.build_read_filter(record_id, actor, include_deleted).to_where()
        with self.store_errors("read", record_id):
            row = await self.delegate.find_first(where)
        if row is None:
            raise EntityNotFoundError(self.model_name, record_id)

        record = self.to_record(row)
        await self._cache_put(record)
        return record

    async def update(self, record_id: str, patch: UpdateT, actor: Optional[ActorContext] = None) -> T:
        """Update a record visible to the actor and refresh its cache entry."""
        await self.read(record_id, actor)
        data = self.prepare_update_data(self.input_to_dict(patch, partial=True), actor)

        with self.store_errors("update", record_id):
            row = await self.delegate.update({"id": record_id}, data)

        record = self.to_record(row)
        await self._cache_refresh(record)
        logger.info(f"Updated {self.model_name} {record_id}")
        return record

    async def delete(self, record_id: str, actor: Optional[ActorContext] = None) -> T:
        """Soft delete a record and drop its cache entry."""
        await self.read(record_id, actor)

        with self.store_errors("delete", record_id):
            row = await self.delegate.update({"id": record_id}, self.soft_delete_data(actor))

        await self._cache_evict(record_id)
        logger.info(f"Soft deleted {self.model_name} {record_id}")
        return self.to_record(row)

    async def hard_delete(self, record_id: str, actor: Optional[ActorContext] = None) -> T:
        """Permanently remove a record, soft deleted or not."""
        await self.read(record_id, actor, include_deleted=True)

        with self.store_errors("hard_delete", record_id):
            row = await self.delegate.delete({"id": record_id})

        await self._cache_evict(record_id)
        logger.info(f"Hard deleted {self.model_name} {record_id}")
        return self.to_record(row)

    async def list(
        self,
        actor: Optional[ActorContext] = None,
        options: Optional[ListOptions] = None,
    ) -> ListResult[T]:
        """List records visible to the actor, one cursor page at a time."""
        return await self.list_where(actor, options)

    async def list_where(
        self,
        actor: Optional[ActorContext] = None,
        options: Optional[ListOptions] = None,
        **predicates: Any,
    ) -> ListResult[T]:
        """List with extra equality predicates on top of the actor scope."""
        options = options or ListOptions()
        where = self.build_list_filter(actor, options).with_equals(**predicates).to_where()

        with self.store_errors("list"):
            page = await self.fetch_page(self.delegate, where, options)
        return page.map(self.to_record)

    async def find_one(self, actor: Optional[ActorContext] = None, **predicates: Any) -> Optional[T]:
        """First live record visible to the actor matching the predicates."""
        where = self.build_list_filter(actor, ListOptions()).with_equals(**predicates).to_where()
        with self.store_errors("find_one"):
            row = await self.delegate.find_first(where)
        if row is None:
            return None
        record = self.to_record(row)
        await self._cache_put(record)
        return record

    async def count(self, actor: Optional[ActorContext] = None, include_deleted: bool = False) -> int:
        """Count records visible to the actor."""
        where = self.build_list_filter(actor, ListOptions(include_deleted=include_deleted)).to_where()
        with self.store_errors("count"):
            return await self.delegate.count(where)

    async def read_many(self, record_ids: Iterable[str], actor: Optional[ActorContext] = None) -> List[T]:
        """Read several records, skipping those that are absent or invisible.

        Flat-cached types are served by one pipelined cache read. Misses are
        fetched from the store in a single query and written back.
        """
        record_ids = list(dict.fromkeys(record_ids))
        if not record_ids:
            return []

        found: Dict[str, T] = {}
        if self.cache_config.representation == CacheRepresentation.FLAT and self._cache_usable():
            try:
                cached = await self.cache.get_many_flat(self.cache_key(rid) for rid in record_ids)
            except Exception as e:
                self.metrics.record_read_failure()
                logger.warning(f"Bulk cache read failed for {self.model_name}: {e}")
                cached = {}
            for record_id in record_ids:
                data = cached.get(self.cache_key(record_id))
                record = self._decode_cached(data) if data else None
                if record is not None and self.is_visible(record, actor):
                    self.metrics.record_hit()
                    found[record_id] = record
                else:
                    self.metrics.record_miss()

        missing = [rid for rid in record_ids if rid not in found]
        if missing:
            where = self.build_list_filter(actor, ListOptions()).to_where()
            where["id"] = {"in": missing}
            with self.store_errors("read_many"):
                rows = await self.delegate.find_many(where=where)
            for row in rows:
                record = self.to_record(row)
                found[record.id] = record
                await self._cache_put(record)

        return [found[rid] for rid in record_ids if rid in found]

    def _decode_cached(self, data: Dict[str, Any]) -> Optional[T]:
        try:
            return from_flat(data, self.record_type)
        except Exception as e:
            self.metrics.record_read_failure()
            logger.warning(f"Discarding undecodable cached {self.model_name}: {e}")
            return None
