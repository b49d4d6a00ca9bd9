"""Process-wide cache tier lifecycle.

The composition root builds one cache tier per process through a
CacheTierProvider and injects it into managers. Managers never look the tier
up themselves.
"""

import logging
from typing import Optional

from ....config.constants import CacheBackend
from ....config.settings import CacheSettings, get_cache_settings
from ....core.exceptions import CacheError
from ..adapters.memory_adapter import MemoryCacheTier
from ..adapters.redis_adapter import RedisCacheTier
from ..entities.protocols import CacheTier

logger = logging.getLogger(__name__)


def create_cache_tier(settings: CacheSettings) -> CacheTier:
    """Build a cache tier for the configured backend."""
    if settings.backend == CacheBackend.MEMORY:
        return MemoryCacheTier(scan_batch_size=settings.scan_batch_size)
    return RedisCacheTier(settings)


class CacheTierProvider:
    """Creates the cache tier lazily and hands out the same instance."""

    def __init__(self, settings: Optional[CacheSettings] = None):
        self._settings = settings
        self._tier: Optional[CacheTier] = None

    @property
    def settings(self) -> CacheSettings:
        if self._settings is None:
            self._settings = get_cache_settings()
        return self._settings

    def get(self) -> Optional[CacheTier]:
        """Get the cache tier, None when caching is not configured."""
        if self._tier is None:
            if not self.settings.is_configured:
                return None
            self._tier = create_cache_tier(self.settings)
            logger.debug(f"Created {self.settings.backend.value} cache tier")
        return self._tier

    async def initialize(self) -> Optional[CacheTier]:
        """Create the tier and connect it unless lazy connect is set.

        A failed connection is logged and leaves the tier degraded. Managers
        fall back to the store until it recovers.
        """
        tier = self.get()
        if tier is None:
            logger.info("Cache tier not configured, managers run store-only")
            return None
        if not self.settings.lazy_connect:
            try:
                await tier.connect()
            except CacheError as e:
                logger.warning(f"Cache tier unreachable at startup: {e.message}")
        return tier

    async def close(self) -> None:
        """Tear down the tier. A later get() builds a fresh one."""
        if self._tier is not None:
            tier, self._tier = self._tier, None
            await tier.close()


_provider: Optional[CacheTierProvider] = None


def get_cache_provider() -> CacheTierProvider:
    """Get the default process-wide provider."""
    global _provider
    if _provider is None:
        _provider = CacheTierProvider()
    return _provider


def set_cache_provider(provider: Optional[CacheTierProvider]) -> None:
    """Replace the default provider, None resets it."""
    global _provider
    _provider = provider


def get_cache_tier() -> Optional[CacheTier]:
    return get_cache_provider().get()


async def init_cache_tier() -> Optional[CacheTier]:
    return await get_cache_provider().initialize()


async def close_cache_tier() -> None:
    await get_cache_provider().close()
