"""Generic managers mediating between the cache tier and the store."""

from .base_manager import BaseManager
from .base_memory_manager import BaseMemoryManager
from .document_cache import DocumentCacheMixin
from .errors import StoreErrorKind, classify_store_error
from .mixins import ActorScopedMixin
from .protocols import StoreDelegate
from .query import DateRange, QueryFilter

__all__ = [
    "BaseManager",
    "BaseMemoryManager",
    "DocumentCacheMixin",
    "StoreErrorKind",
    "classify_store_error",
    "ActorScopedMixin",
    "StoreDelegate",
    "DateRange",
    "QueryFilter",
]
