"""Cache entities."""

from .config import CacheRepresentation, CacheConfig, TTLPolicy
from .protocols import CacheTier

__all__ = [
    "CacheRepresentation",
    "CacheConfig",
    "TTLPolicy",
    "CacheTier",
]
