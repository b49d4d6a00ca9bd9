"""Store delegate adapters."""

from .asyncpg_delegate import AsyncpgStoreDelegate, validate_identifier

__all__ = ["AsyncpgStoreDelegate", "validate_identifier"]
