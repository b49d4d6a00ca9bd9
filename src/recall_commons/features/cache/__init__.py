"""Cache feature for recall-commons.

Provides the cache tier abstraction with flat and document record forms,
its Redis and in-process adapters, the record serializer and the
process-wide tier provider.
"""

from .entities import CacheRepresentation, CacheConfig, TTLPolicy, CacheTier
from .adapters import MemoryCacheTier, RedisCacheTier
from .services import (
    CacheMetrics,
    CacheTierProvider,
    get_cache_tier,
    init_cache_tier,
    close_cache_tier,
)

__all__ = [
    "CacheRepresentation",
    "CacheConfig",
    "TTLPolicy",
    "CacheTier",
    "MemoryCacheTier",
    "RedisCacheTier",
    "CacheMetrics",
    "CacheTierProvider",
    "get_cache_tier",
    "init_cache_tier",
    "close_cache_tier",
]
