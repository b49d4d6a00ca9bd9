"""Infrastructure-specific exceptions for recall-commons.

Cache errors never escape a manager operation; they are raised by cache
tiers and absorbed by the managers that call them.
"""

from .base import RecallCommonsError


class CacheError(RecallCommonsError):
    """Base class for cache-related errors."""
    pass


class CacheUnavailableError(CacheError):
    """Raised when the cache service cannot be reached or timed out."""
    pass


class CacheOperationError(CacheError):
    """Raised when the cache service rejected a command."""
    pass


class CacheSerializationError(CacheError):
    """Raised when cache value serialization/deserialization fails."""
    pass
