"""Domain exceptions for recall-commons.

These are the only failures a manager operation surfaces to its callers.
Store-specific error shapes are translated into them at the manager boundary.
"""

from typing import Optional, Sequence

from .base import RecallCommonsError


class DomainError(RecallCommonsError):
    """Base class for domain errors raised by managers."""
    pass


class EntityNotFoundError(DomainError):
    """Raised when a record is absent or not visible to the acting tenant.
    
    The two cases are deliberately indistinguishable so that a caller from
    another tenant cannot probe for the existence of a record.
    """
    
    def __init__(self, entity_type: str, identifier: str):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(
            f"{entity_type} with id '{identifier}' not found",
            details={"entity_type": entity_type, "identifier": identifier},
        )


class ConflictError(DomainError):
    """Raised when a write violates a uniqueness constraint."""
    
    def __init__(self, entity_type: str, fields: Optional[Sequence[str]] = None):
        self.entity_type = entity_type
        self.fields = list(fields or [])
        super().__init__(
            f"A {entity_type} with this value already exists",
            details={"entity_type": entity_type, "fields": self.fields},
        )


class InvalidReferenceError(DomainError):
    """Raised when a write points at a record that does not exist."""
    
    def __init__(self, entity_type: str, field: Optional[str] = None):
        self.entity_type = entity_type
        self.field = field
        super().__init__(
            f"Invalid reference in {entity_type}",
            details={"entity_type": entity_type, "field": field},
        )
