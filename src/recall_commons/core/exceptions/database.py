"""Store delegate exceptions for recall-commons.

Store delegates that are not backed by asyncpg raise these so that managers
can classify failures without knowing the delegate's implementation.
"""

from typing import Any, Dict, Optional

from .base import RecallCommonsError


class StoreError(RecallCommonsError):
    """Base class for errors raised by store delegates."""
    pass


class StoreRecordMissingError(StoreError):
    """Raised when the row targeted by an update or delete does not exist."""
    
    def __init__(self, table: str, where: Optional[Dict[str, Any]] = None):
        self.table = table
        self.where = where or {}
        super().__init__(
            f"No {table} row matched {self.where}",
            details={"table": table, "where": {k: str(v) for k, v in self.where.items()}},
        )


class StoreUniqueViolationError(StoreError):
    """Raised when a write violates a unique constraint."""
    
    def __init__(self, message: str, constraint: Optional[str] = None):
        self.constraint = constraint
        super().__init__(message, details={"constraint": constraint})


class StoreForeignKeyViolationError(StoreError):
    """Raised when a write references a row that does not exist."""
    
    def __init__(self, message: str, constraint: Optional[str] = None):
        self.constraint = constraint
        super().__init__(message, details={"constraint": constraint})
