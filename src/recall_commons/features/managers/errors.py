"""Classification of store delegate failures."""

from enum import Enum
from typing import List, Optional

from asyncpg.exceptions import ForeignKeyViolationError, UniqueViolationError

from ...config.constants import StoreErrorCodes
from ...core.exceptions import (
    StoreForeignKeyViolationError,
    StoreRecordMissingError,
    StoreUniqueViolationError,
)


class StoreErrorKind(str, Enum):
    """Store failures that map onto domain errors."""
    UNIQUE_VIOLATION = "unique_violation"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    RECORD_MISSING = "record_missing"


def classify_store_error(error: BaseException) -> Optional[StoreErrorKind]:
    """Classify a store error, None when it has no domain mapping.
    
    Recognizes the store delegate exceptions, asyncpg's constraint
    violations and any exception carrying a PostgreSQL ``sqlstate``.
    """
    if isinstance(error, StoreRecordMissingError):
        return StoreErrorKind.RECORD_MISSING
    if isinstance(error, (StoreUniqueViolationError, UniqueViolationError)):
        return StoreErrorKind.UNIQUE_VIOLATION
    if isinstance(error, (StoreForeignKeyViolationError, ForeignKeyViolationError)):
        return StoreErrorKind.FOREIGN_KEY_VIOLATION
    
    sqlstate = getattr(error, "sqlstate", None)
    if sqlstate == StoreErrorCodes.UNIQUE_VIOLATION:
        return StoreErrorKind.UNIQUE_VIOLATION
    if sqlstate == StoreErrorCodes.FOREIGN_KEY_VIOLATION:
        return StoreErrorKind.FOREIGN_KEY_VIOLATION
    return None


def constraint_fields(error: BaseException) -> List[str]:
    """Best-effort list of columns named by a constraint violation."""
    constraint = getattr(error, "constraint_name", None) or getattr(error, "constraint", None)
    return [constraint] if constraint else []
