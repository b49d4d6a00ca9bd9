"""Cache tier protocol for recall-commons."""

from typing import (
    Any,
    AsyncIterator,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    runtime_checkable,
)


@runtime_checkable
class CacheTier(Protocol):
    """Entity-agnostic cache tier.
    
    Any operation may raise ``CacheUnavailableError``. Callers treat that as a
    miss on reads and ignore it on writes.
    """
    
    @property
    def is_ready(self) -> bool:
        """Whether the tier is currently believed reachable."""
        ...
    
    async def connect(self) -> None:
        """Establish the connection eagerly."""
        ...
    
    async def close(self) -> None:
        """Release the connection."""
        ...
    
    async def ping(self) -> bool:
        """Round-trip to the cache service."""
        ...
    
    async def set_flat(self, key: str, fields: Mapping[str, str], ttl: Optional[int] = None) -> None:
        """Write a flat record, replacing any previous value."""
        ...
    
    async def get_flat(self, key: str) -> Optional[Dict[str, str]]:
        """Read a flat record, None when absent."""
        ...
    
    async def get_flat_fields(self, key: str, field_names: Sequence[str]) -> List[Optional[str]]:
        """Read selected fields, aligned with ``field_names``."""
        ...
    
    async def set_document(self, key: str, tree: Mapping[str, Any], ttl: Optional[int] = None) -> None:
        """Write a document record, replacing any previous value."""
        ...
    
    async def get_document(self, key: str) -> Optional[Dict[str, Any]]:
        """Read a whole document record, None when absent."""
        ...
    
    async def get_document_path(self, key: str, path: str) -> Any:
        """Read a single path of a document record."""
        ...
    
    async def delete(self, key: str) -> bool:
        """Delete a key, True if it existed."""
        ...
    
    async def delete_many(self, keys: Iterable[str]) -> int:
        """Delete keys, returning how many existed."""
        ...
    
    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        ...
    
    async def ttl(self, key: str) -> Optional[int]:
        """Remaining seconds to live, None when absent or persistent."""
        ...
    
    def scan(self, pattern: str, batch_size: Optional[int] = None) -> AsyncIterator[List[str]]:
        """Lazily yield batches of keys matching a glob pattern."""
        ...
    
    async def get_many_flat(self, keys: Iterable[str]) -> Dict[str, Dict[str, str]]:
        """Read many flat records in one round-trip, skipping absent keys."""
        ...
