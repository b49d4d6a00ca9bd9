"""Configuration for recall-commons."""

from .constants import (
    CacheBackend,
    EntityType,
    CacheKeyPrefix,
    CacheTTL,
    PaginationDefaults,
    StoreErrorCodes,
)
from .settings import CacheSettings, get_cache_settings
from .logging_config import LoggingConfig, setup_logging, get_logger

__all__ = [
    "CacheBackend",
    "EntityType",
    "CacheKeyPrefix",
    "CacheTTL",
    "PaginationDefaults",
    "StoreErrorCodes",
    "CacheSettings",
    "get_cache_settings",
    "LoggingConfig",
    "setup_logging",
    "get_logger",
]
