"""In-process cache tier for recall-commons.

Mirrors the Redis tier's semantics closely enough for single-process
deployments and tests: flat values are stored as strings, documents as JSON
text, keys expire lazily on access and are swept periodically during writes,
and reading a key through the wrong representation
fails the way a WRONGTYPE reply would.
"""

import json
import logging
import time
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any, AsyncIterator, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ....core.exceptions import CacheOperationError, CacheUnavailableError

logger = logging.getLogger(__name__)

FLAT = "flat"
DOCUMENT = "document"


@dataclass
class _Entry:
    kind: str
    value: Any
    expires_at: Optional[float] = None


class MemoryCacheTier:
    """Dictionary-backed cache tier."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        scan_batch_size: int = 100,
        cleanup_every: int = 1000,
        cleanup_interval: float = 60.0,
    ):
        self._entries: Dict[str, _Entry] = {}
        self._clock = clock
        self._scan_batch_size = scan_batch_size
        self._cleanup_every = max(1, cleanup_every)
        self._cleanup_interval = cleanup_interval
        self._writes_since_cleanup = 0
        self._last_cleanup = clock()
        self._closed = False

    @property
    def is_ready(self) -> bool:
        return not self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise CacheUnavailableError("Memory cache tier is closed")

    def _live_entry(self, key: str) -> Optional[_Entry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry

    def _typed_entry(self, key: str, kind: str) -> Optional[_Entry]:
        entry = self._live_entry(key)
        if entry is not None and entry.kind != kind:
            raise CacheOperationError(
                f"Key {key} holds a {entry.kind} record, not {kind}",
                details={"key": key},
            )
        return entry

    def _expiry(self, ttl: Optional[int]) -> Optional[float]:
        return self._clock() + ttl if ttl else None

    def _cleanup_expired(self) -> int:
        """Remove every expired entry, returning how many were dropped."""
        now = self._clock()
        self._last_cleanup = now
        self._writes_since_cleanup = 0
        expired_keys = [
            key for key, entry in self._entries.items()
            if entry.expires_at is not None and entry.expires_at <= now
        ]
        for key in expired_keys:
            del self._entries[key]
        if expired_keys:
            logger.debug(f"Swept {len(expired_keys)} expired cache entries")
        return len(expired_keys)

    def _store(self, key: str, entry: _Entry) -> None:
        """Insert an entry, sweeping expired ones every few writes or seconds."""
        self._writes_since_cleanup += 1
        if (
            self._writes_since_cleanup >= self._cleanup_every
            or self._clock() - self._last_cleanup >= self._cleanup_interval
        ):
            self._cleanup_expired()
        self._entries[key] = entry

    # Lifecycle

    async def connect(self) -> None:
        self._closed = False

    async def ping(self) -> bool:
        self._ensure_open()
        return True

    async def close(self) -> None:
        self._entries.clear()
        self._closed = True

    def connection_info(self) -> Dict[str, Any]:
        return {"target": "memory", "ready": self.is_ready, "keys": len(self._entries)}

    # Flat records

    async def set_flat(self, key: str, fields: Mapping[str, str], ttl: Optional[int] = None) -> None:
        self._ensure_open()
        if not fields:
            self._entries.pop(key, None)
            return
        self._store(key, _Entry(
            FLAT, {name: str(value) for name, value in fields.items()}, self._expiry(ttl)
        ))

    async def get_flat(self, key: str) -> Optional[Dict[str, str]]:
        self._ensure_open()
        entry = self._typed_entry(key, FLAT)
        if entry is None or all(value == "" for value in entry.value.values()):
            return None
        return dict(entry.value)

    async def get_flat_fields(self, key: str, field_names: Sequence[str]) -> List[Optional[str]]:
        self._ensure_open()
        entry = self._typed_entry(key, FLAT)
        values = entry.value if entry is not None else {}
        return [values.get(name) for name in field_names]

    async def get_many_flat(self, keys: Iterable[str]) -> Dict[str, Dict[str, str]]:
        self._ensure_open()
        records: Dict[str, Dict[str, str]] = {}
        for key in keys:
            entry = self._live_entry(key)
            if entry is not None and entry.kind == FLAT and any(value != "" for value in entry.value.values()):
                records[key] = dict(entry.value)
        return records

    # Document records

    async def set_document(self, key: str, tree: Mapping[str, Any], ttl: Optional[int] = None) -> None:
        self._ensure_open()
        try:
            encoded = json.dumps(dict(tree))
        except (TypeError, ValueError) as e:
            raise CacheOperationError(f"Document for {key} is not JSON: {e}", details={"key": key}) from e
        self._store(key, _Entry(DOCUMENT, encoded, self._expiry(ttl)))

    async def get_document(self, key: str) -> Optional[Dict[str, Any]]:
        self._ensure_open()
        entry = self._typed_entry(key, DOCUMENT)
        return json.loads(entry.value) if entry is not None else None

    async def get_document_path(self, key: str, path: str) -> Any:
        """Resolve dotted paths such as ``$.details`` or ``tree_path.0``."""
        document = await self.get_document(key)
        if document is None:
            return None
        node: Any = document
        for part in path.lstrip("$").strip(".").split("."):
            if not part:
                continue
            if isinstance(node, dict):
                node = node.get(part)
            elif isinstance(node, list) and part.isdigit() and int(part) < len(node):
                node = node[int(part)]
            else:
                return None
            if node is None:
                return None
        return node

    # Keys

    async def delete(self, key: str) -> bool:
        self._ensure_open()
        existed = self._live_entry(key) is not None
        self._entries.pop(key, None)
        return existed

    async def delete_many(self, keys: Iterable[str]) -> int:
        removed = 0
        for key in keys:
            if await self.delete(key):
                removed += 1
        return removed

    async def exists(self, key: str) -> bool:
        self._ensure_open()
        return self._live_entry(key) is not None

    async def ttl(self, key: str) -> Optional[int]:
        self._ensure_open()
        entry = self._live_entry(key)
        if entry is None or entry.expires_at is None:
            return None
        return max(0, int(round(entry.expires_at - self._clock())))

    async def scan(self, pattern: str, batch_size: Optional[int] = None) -> AsyncIterator[List[str]]:
        self._ensure_open()
        size = batch_size or self._scan_batch_size
        # Snapshot so callers may delete while iterating
        matched = [key for key in list(self._entries) if fnmatchcase(key, pattern)]
        for start in range(0, len(matched), size):
            batch = [key for key in matched[start:start + size] if self._live_entry(key) is not None]
            if batch:
                yield batch
