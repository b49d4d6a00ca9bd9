"""Cache services."""

from .cache_metrics import CacheMetrics
from .cache_provider import (
    CacheTierProvider,
    create_cache_tier,
    get_cache_provider,
    set_cache_provider,
    get_cache_tier,
    init_cache_tier,
    close_cache_tier,
)

__all__ = [
    "CacheMetrics",
    "CacheTierProvider",
    "create_cache_tier",
    "get_cache_provider",
    "set_cache_provider",
    "get_cache_tier",
    "init_cache_tier",
    "close_cache_tier",
]
