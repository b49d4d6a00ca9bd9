"""Exception hierarchy for recall-commons."""

from .base import RecallCommonsError, create_error_response
from .domain import (
    DomainError,
    EntityNotFoundError,
    ConflictError,
    InvalidReferenceError,
)
from .infrastructure import (
    CacheError,
    CacheUnavailableError,
    CacheOperationError,
    CacheSerializationError,
)
from .database import (
    StoreError,
    StoreRecordMissingError,
    StoreUniqueViolationError,
    StoreForeignKeyViolationError,
)

__all__ = [
    # Base
    "RecallCommonsError",
    "create_error_response",
    
    # Domain Errors
    "DomainError",
    "EntityNotFoundError",
    "ConflictError",
    "InvalidReferenceError",
    
    # Cache Errors
    "CacheError",
    "CacheUnavailableError",
    "CacheOperationError",
    "CacheSerializationError",
    
    # Store Errors
    "StoreError",
    "StoreRecordMissingError",
    "StoreUniqueViolationError",
    "StoreForeignKeyViolationError",
]
