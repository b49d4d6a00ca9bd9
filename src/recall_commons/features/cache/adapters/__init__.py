"""Cache tier adapters."""

from .memory_adapter import MemoryCacheTier
from .redis_adapter import RedisCacheTier

__all__ = [
    "MemoryCacheTier",
    "RedisCacheTier",
]
