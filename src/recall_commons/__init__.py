"""Recall-Commons - multi-tenant data access and cache-aside layer.

Provides the cache tier (flat and document records over Redis or an
in-process store), the generic cache-aside manager every entity manager
extends, and the managers for tenants, agents and memory records.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    CacheBackend,
    CacheKeyPrefix,
    CacheSettings,
    CacheTTL,
    EntityType,
    get_cache_settings,
)

from .core.exceptions import (
    RecallCommonsError,
    EntityNotFoundError,
    ConflictError,
    InvalidReferenceError,
    CacheError,
    CacheUnavailableError,
    create_error_response,
)

from .core.shared import ActorContext, AccessPermission, BaseRecord

from .features.cache import (
    CacheConfig,
    CacheMetrics,
    CacheRepresentation,
    CacheTier,
    CacheTierProvider,
    MemoryCacheTier,
    RedisCacheTier,
    TTLPolicy,
    close_cache_tier,
    get_cache_tier,
    init_cache_tier,
)

from .features.pagination import ListOptions, ListResult, MemoryListOptions, SortField, SortOrder

from .features.managers import (
    BaseManager,
    BaseMemoryManager,
    QueryFilter,
    DateRange,
    StoreDelegate,
)

__all__ = [
    "__version__",
    "setup_logging",
    
    # Configuration
    "CacheBackend",
    "CacheKeyPrefix",
    "CacheSettings",
    "CacheTTL",
    "EntityType",
    "get_cache_settings",
    
    # Exceptions
    "RecallCommonsError",
    "EntityNotFoundError",
    "ConflictError",
    "InvalidReferenceError",
    "CacheError",
    "CacheUnavailableError",
    "create_error_response",
    
    # Core
    "ActorContext",
    "AccessPermission",
    "BaseRecord",
    
    # Cache
    "CacheConfig",
    "CacheMetrics",
    "CacheRepresentation",
    "CacheTier",
    "CacheTierProvider",
    "MemoryCacheTier",
    "RedisCacheTier",
    "TTLPolicy",
    "close_cache_tier",
    "get_cache_tier",
    "init_cache_tier",
    
    # Pagination
    "ListOptions",
    "ListResult",
    "MemoryListOptions",
    "SortField",
    "SortOrder",
    
    # Managers
    "BaseManager",
    "BaseMemoryManager",
    "QueryFilter",
    "DateRange",
    "StoreDelegate",
]
