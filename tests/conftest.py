"""Pytest configuration and fixtures for recall-commons tests."""

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pytest
from unittest.mock import AsyncMock, MagicMock

from recall_commons.config.settings import CacheSettings
from recall_commons.core.exceptions import (
    CacheUnavailableError,
    StoreForeignKeyViolationError,
    StoreRecordMissingError,
    StoreUniqueViolationError,
)
from recall_commons.core.shared.context import ActorContext
from recall_commons.features.cache.adapters.memory_adapter import MemoryCacheTier
from recall_commons.features.cache.services.cache_metrics import CacheMetrics


class InMemoryStoreDelegate:
    """Store delegate fake with the same where, order and cursor semantics as the SQL one."""

    def __init__(
        self,
        unique_fields: Sequence[str] = (),
        references: Optional[Mapping[str, Iterable[str]]] = None,
    ):
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.unique_fields = tuple(unique_fields)
        self.references = {k: set(v) for k, v in (references or {}).items()}
        self.calls: List[str] = []
        self.fail_with: Optional[BaseException] = None

    def _record_call(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error

    @staticmethod
    def _matches(row: Mapping[str, Any], where: Optional[Mapping[str, Any]]) -> bool:
        for column, condition in (where or {}).items():
            value = row.get(column)
            if isinstance(condition, Mapping):
                for operator, expected in condition.items():
                    if operator == "in" and value not in expected:
                        return False
                    if operator == "not" and value == expected:
                        return False
                    if operator == "gte" and not (value is not None and value >= expected):
                        return False
                    if operator == "lte" and not (value is not None and value <= expected):
                        return False
                    if operator == "gt" and not (value is not None and value > expected):
                        return False
                    if operator == "lt" and not (value is not None and value < expected):
                        return False
            elif value != condition:
                return False
        return True

    def calls_to(self, name: str) -> int:
        return self.calls.count(name)

    async def find_unique(self, where):
        return await self.find_first(where)

    async def find_first(self, where):
        self._record_call("find_first")
        for row in self.rows.values():
            if self._matches(row, where):
                return dict(row)
        return None

    async def find_many(self, where=None, order_by=None, take=None, skip=None, cursor=None):
        self._record_call("find_many")
        rows = [dict(row) for row in self.rows.values() if self._matches(row, where)]
        # Stable sorts applied from the last key to the first
        for item in reversed(list(order_by or [])):
            for column, direction in item.items():
                rows.sort(key=lambda r: r[column], reverse=direction == "desc")
        if cursor:
            (column, value), = cursor.items()
            anchor = next((r for r in self.rows.values() if r.get(column) == value), None)
            if anchor is None:
                return []
            terms = [(c, d) for item in (order_by or [{"id": "asc"}]) for c, d in item.items()]
            rows = [r for r in rows if self._after(r, anchor, terms)]
        if skip:
            rows = rows[skip:]
        if take is not None:
            rows = rows[:take]
        return rows

    @staticmethod
    def _after(row, anchor, terms):
        for column, direction in terms:
            if row[column] == anchor[column]:
                continue
            if direction == "desc":
                return row[column] < anchor[column]
            return row[column] > anchor[column]
        return False

    async def create(self, data):
        self._record_call("create")
        for field in self.unique_fields:
            if any(row.get(field) == data.get(field) for row in self.rows.values()):
                raise StoreUniqueViolationError(f"duplicate {field}", constraint=field)
        for field, valid_ids in self.references.items():
            if data.get(field) is not None and data[field] not in valid_ids:
                raise StoreForeignKeyViolationError(f"dangling {field}", constraint=field)
        self.rows[data["id"]] = dict(data)
        return dict(data)

    async def update(self, where, data):
        self._record_call("update")
        for row in self.rows.values():
            if self._matches(row, where):
                row.update(data)
                return dict(row)
        raise StoreRecordMissingError("records", dict(where))

    async def delete(self, where):
        self._record_call("delete")
        for record_id, row in list(self.rows.items()):
            if self._matches(row, where):
                return self.rows.pop(record_id)
        raise StoreRecordMissingError("records", dict(where))

    async def count(self, where=None):
        self._record_call("count")
        return sum(1 for row in self.rows.values() if self._matches(row, where))


class UnavailableCacheTier(MemoryCacheTier):
    """Cache tier that claims to be ready but fails every command."""

    def _fail(self, *args, **kwargs):
        raise CacheUnavailableError("connection refused")

    async def set_flat(self, *args, **kwargs):
        self._fail()

    async def get_flat(self, *args, **kwargs):
        self._fail()

    async def get_many_flat(self, *args, **kwargs):
        self._fail()

    async def set_document(self, *args, **kwargs):
        self._fail()

    async def get_document(self, *args, **kwargs):
        self._fail()

    async def get_document_path(self, *args, **kwargs):
        self._fail()

    async def delete(self, *args, **kwargs):
        self._fail()

    async def delete_many(self, *args, **kwargs):
        self._fail()

    async def exists(self, *args, **kwargs):
        self._fail()


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def store():
    """In-memory store delegate."""
    return InMemoryStoreDelegate()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    """In-memory cache tier driven by a fake clock."""
    return MemoryCacheTier(clock=clock)


@pytest.fixture
def unavailable_cache():
    return UnavailableCacheTier()


@pytest.fixture
def metrics():
    return CacheMetrics()


@pytest.fixture
def actor_t1():
    """Actor in tenant org-1."""
    return ActorContext.for_tenant("actor-1", "org-1", user_id="user-1")


@pytest.fixture
def actor_t2():
    """Actor in tenant org-2."""
    return ActorContext.for_tenant("actor-2", "org-2", user_id="user-2")


@pytest.fixture
def cache_settings():
    """Redis settings with a short degraded probe interval."""
    return CacheSettings(
        enabled=True,
        host="localhost",
        degraded_probe_seconds=5.0,
    )


@pytest.fixture
def mock_redis():
    """Mock redis.asyncio client."""
    client = MagicMock()
    client.ping = AsyncMock(return_value=True)
    client.hgetall = AsyncMock(return_value={})
    client.hmget = AsyncMock(return_value=[])
    client.delete = AsyncMock(return_value=1)
    client.exists = AsyncMock(return_value=1)
    client.expire = AsyncMock(return_value=True)
    client.ttl = AsyncMock(return_value=-2)
    client.scan = AsyncMock(return_value=(0, []))
    client.aclose = AsyncMock()

    pipeline = MagicMock()
    pipeline.execute = AsyncMock(return_value=[])
    client.pipeline.return_value = pipeline

    json_commands = MagicMock()
    json_commands.set = AsyncMock(return_value=True)
    json_commands.get = AsyncMock(return_value=None)
    client.json.return_value = json_commands
    return client


@pytest.fixture
def timestamps():
    """Strictly increasing creation timestamps."""
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    counter = itertools.count()
    return lambda: base + timedelta(seconds=next(counter))


@pytest.fixture
def store_factory():
    """Build store delegates with unique or reference constraints."""
    return InMemoryStoreDelegate
