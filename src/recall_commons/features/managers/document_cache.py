"""Opt-in document caching for memory managers."""

import logging
from typing import Any, Callable, ClassVar, Optional

from ..cache.entities.config import CacheConfig, CacheRepresentation, TTLPolicy
from ..cache.entities.protocols import CacheTier
from ..cache.serializers.record_serializer import from_document, to_document
from ..cache.services.cache_metrics import CacheMetrics

logger = logging.getLogger(__name__)


class DocumentCacheMixin:
    """Caches memory records as documents when a caller asks for it.

    Vectors are stored as-is. A cached document whose shape no longer fits
    the record type is treated as a miss.
    """

    entity_type: ClassVar[str]
    cache_prefix: ClassVar[str] = ""

    cache: Optional[CacheTier] = None
    cache_config: Optional[CacheConfig] = None
    metrics: CacheMetrics

    def configure_cache(
        self,
        cache: Optional[CacheTier],
        ttl_policy: Optional[TTLPolicy] = None,
        metrics: Optional[CacheMetrics] = None,
    ) -> None:
        entity_type = getattr(self.entity_type, "value", self.entity_type)
        self.cache = cache
        self.metrics = metrics or CacheMetrics()
        self.cache_config = CacheConfig(
            prefix=self.cache_prefix,
            ttl=(ttl_policy or TTLPolicy()).ttl_for(entity_type),
            representation=CacheRepresentation.DOCUMENT,
        )

    def _document_cache_usable(self) -> bool:
        return (
            self.cache is not None
            and self.cache_config is not None
            and self.cache_config.is_active
            and self.cache.is_ready
        )

    async def cache_record(self, record: Any) -> bool:
        """Write a record to the cache, True when stored."""
        if getattr(record, "is_deleted", False) or not self._document_cache_usable():
            return False
        key = self.cache_config.key(record.id)
        try:
            await self.cache.set_document(key, to_document(record), self.cache_config.ttl)
        except Exception as e:
            self.metrics.record_write_failure()
            logger.warning(f"Document cache write failed for {key}: {e}")
            return False
        self.metrics.record_write()
        return True

    async def get_cached(self, record_id: str, accept: Optional[Callable[[Any], bool]] = None) -> Optional[Any]:
        """Get a cached record, None on miss or cache failure.

        An entry rejected by ``accept`` is reported and counted as a miss.
        """
        if not self._document_cache_usable():
            return None
        key = self.cache_config.key(record_id)
        try:
            data = await self.cache.get_document(key)
            record = from_document(data, self.record_type) if data else None
        except Exception as e:
            self.metrics.record_read_failure()
            logger.warning(f"Document cache read failed for {key}: {e}")
            return None
        if record is None or (accept is not None and not accept(record)):
            self.metrics.record_miss()
            return None
        self.metrics.record_hit()
        return record

    async def get_cached_field(self, record_id: str, path: str) -> Any:
        """Read a single field of a cached record without loading its vectors."""
        if not self._document_cache_usable():
            return None
        key = self.cache_config.key(record_id)
        try:
            return await self.cache.get_document_path(key, path)
        except Exception as e:
            self.metrics.record_read_failure()
            logger.warning(f"Document cache path read failed for {key}: {e}")
            return None

    async def evict_cached(self, record_id: str) -> bool:
        """Drop a cached record, True if one was removed."""
        if self.cache is None or self.cache_config is None:
            return False
        key = self.cache_config.key(record_id)
        try:
            removed = await self.cache.delete(key)
        except Exception as e:
            self.metrics.record_eviction_failure()
            logger.warning(f"Document cache eviction failed for {key}: {e}")
            return False
        if removed:
            self.metrics.record_eviction()
        return removed
