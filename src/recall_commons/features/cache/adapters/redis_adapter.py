"""Redis cache tier for recall-commons.

Flat records are stored as hashes and document records as RedisJSON
documents. Connection-level failures are retried by the client with bounded
exponential backoff. Once retries are exhausted the tier is marked degraded
and reports ``is_ready = False`` until the probe interval elapses.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Iterable, List, Mapping, Optional, Sequence

from redis.asyncio import Redis
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    RedisError,
    TimeoutError as RedisTimeoutError,
)

from ....config.settings import CacheSettings
from ....core.exceptions import CacheOperationError, CacheUnavailableError

logger = logging.getLogger(__name__)


class RedisCacheTier:
    """Cache tier backed by a Redis server with the RedisJSON module."""

    def __init__(self, settings: CacheSettings, client: Optional[Redis] = None):
        self.settings = settings
        self._client = client
        self._degraded_since: Optional[float] = None

    @property
    def client(self) -> Redis:
        """Underlying client, created on first use."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def to_connection_kwargs(self) -> Dict[str, Any]:
        """Convert settings to Redis client keyword arguments."""
        backoff = ExponentialBackoff(
            cap=self.settings.retry_cap_ms / 1000,
            base=self.settings.retry_delay_ms / 1000,
        )
        kwargs: Dict[str, Any] = {
            "socket_connect_timeout": self.settings.connect_timeout_ms / 1000,
            "socket_timeout": self.settings.command_timeout_ms / 1000,
            "retry": Retry(backoff, self.settings.max_retries),
            "retry_on_error": [RedisConnectionError, RedisTimeoutError],
            "decode_responses": True,
        }
        if self.settings.password is not None:
            kwargs["password"] = self.settings.password.get_secret_value()
        return kwargs

    def _create_client(self) -> Redis:
        kwargs = self.to_connection_kwargs()
        if self.settings.url:
            return Redis.from_url(self.settings.url, **kwargs)
        return Redis(
            host=self.settings.host or "localhost",
            port=self.settings.port,
            db=self.settings.db,
            **kwargs,
        )

    # Readiness

    @property
    def is_ready(self) -> bool:
        """False while degraded, True again once a probe is due."""
        if self._degraded_since is None:
            return True
        elapsed = time.monotonic() - self._degraded_since
        return elapsed >= self.settings.degraded_probe_seconds

    @property
    def is_degraded(self) -> bool:
        return self._degraded_since is not None

    def _mark_degraded(self, error: Exception) -> None:
        if self._degraded_since is None:
            logger.warning(f"Redis cache tier degraded: {error}")
        self._degraded_since = time.monotonic()

    def _mark_recovered(self) -> None:
        if self._degraded_since is not None:
            logger.info("Redis cache tier recovered")
        self._degraded_since = None

    @asynccontextmanager
    async def _command(self, operation: str, key: Optional[str] = None) -> AsyncIterator[Redis]:
        """Run a command, translating Redis errors into cache errors."""
        if not self.settings.enable_offline_queue and not self.is_ready:
            raise CacheUnavailableError(
                f"Cache unavailable, rejected {operation}",
                details={"operation": operation, "key": key},
            )
        try:
            yield self.client
        except (RedisConnectionError, RedisTimeoutError) as e:
            self._mark_degraded(e)
            raise CacheUnavailableError(
                f"Cache unavailable during {operation}: {e}",
                details={"operation": operation, "key": key},
            ) from e
        except RedisError as e:
            raise CacheOperationError(
                f"Cache {operation} failed: {e}",
                details={"operation": operation, "key": key},
            ) from e
        else:
            self._mark_recovered()

    # Lifecycle

    async def connect(self) -> None:
        """Connect eagerly by pinging the server."""
        await self.ping()
        logger.info(f"Connected to Redis cache tier ({self.connection_info()['target']})")

    async def ping(self) -> bool:
        async with self._command("ping") as client:
            return bool(await client.ping())

    async def close(self) -> None:
        """Close the client and its connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis cache tier closed")

    def connection_info(self) -> Dict[str, Any]:
        """Describe the connection target without credentials."""
        target = self.settings.url.split("@")[-1] if self.settings.url else (
            f"{self.settings.host or 'localhost'}:{self.settings.port}/{self.settings.db}"
        )
        return {
            "target": target,
            "ready": self.is_ready,
            "degraded": self.is_degraded,
            "max_retries": self.settings.max_retries,
        }

    # Flat records

    async def set_flat(self, key: str, fields: Mapping[str, str], ttl: Optional[int] = None) -> None:
        """Replace a hash and set its expiry in one transaction."""
        async with self._command("set_flat", key) as client:
            pipe = client.pipeline(transaction=True)
            pipe.delete(key)
            if fields:
                pipe.hset(key, mapping=dict(fields))
                if ttl:
                    pipe.expire(key, ttl)
            await pipe.execute()

    async def get_flat(self, key: str) -> Optional[Dict[str, str]]:
        async with self._command("get_flat", key) as client:
            data = await client.hgetall(key)
        if not data or all(value == "" for value in data.values()):
            return None
        return data

    async def get_flat_fields(self, key: str, field_names: Sequence[str]) -> List[Optional[str]]:
        if not field_names:
            return []
        async with self._command("get_flat_fields", key) as client:
            return list(await client.hmget(key, list(field_names)))

    async def get_many_flat(self, keys: Iterable[str]) -> Dict[str, Dict[str, str]]:
        """Read many hashes in a single pipelined round-trip."""
        keys = list(keys)
        if not keys:
            return {}
        async with self._command("get_many_flat") as client:
            pipe = client.pipeline(transaction=False)
            for key in keys:
                pipe.hgetall(key)
            results = await pipe.execute(raise_on_error=False)

        records: Dict[str, Dict[str, str]] = {}
        for key, result in zip(keys, results):
            if isinstance(result, Exception):
                logger.debug(f"Skipping {key} in bulk read: {result}")
                continue
            if result and not all(value == "" for value in result.values()):
                records[key] = result
        return records

    # Document records

    async def set_document(self, key: str, tree: Mapping[str, Any], ttl: Optional[int] = None) -> None:
        """Write a JSON document and its expiry in one transaction."""
        async with self._command("set_document", key) as client:
            pipe = client.pipeline(transaction=True)
            pipe.json().set(key, "$", dict(tree))
            if ttl:
                pipe.expire(key, ttl)
            await pipe.execute()

    async def get_document(self, key: str) -> Optional[Dict[str, Any]]:
        async with self._command("get_document", key) as client:
            result = await client.json().get(key)
        if isinstance(result, list):
            return result[0] if result else None
        return result

    async def get_document_path(self, key: str, path: str) -> Any:
        """Read one path, JSONPath (``$``) results are unwrapped."""
        async with self._command("get_document_path", key) as client:
            result = await client.json().get(key, path)
        if isinstance(result, list) and path.startswith("$"):
            return result[0] if result else None
        return result

    # Keys

    async def delete(self, key: str) -> bool:
        async with self._command("delete", key) as client:
            return bool(await client.delete(key))

    async def delete_many(self, keys: Iterable[str]) -> int:
        keys = list(keys)
        if not keys:
            return 0
        async with self._command("delete_many") as client:
            return int(await client.delete(*keys))

    async def exists(self, key: str) -> bool:
        async with self._command("exists", key) as client:
            return bool(await client.exists(key))

    async def ttl(self, key: str) -> Optional[int]:
        async with self._command("ttl", key) as client:
            remaining = await client.ttl(key)
        # -2 missing key, -1 no expiry
        return remaining if remaining >= 0 else None

    async def scan(self, pattern: str, batch_size: Optional[int] = None) -> AsyncIterator[List[str]]:
        """Walk the keyspace with SCAN, yielding one batch per cursor step.

        Keys present for the whole walk are always yielded. Keys may be
        yielded more than once if the keyspace is rehashed meanwhile.
        """
        count = batch_size or self.settings.scan_batch_size
        cursor = 0
        while True:
            async with self._command("scan", pattern) as client:
                cursor, keys = await client.scan(cursor=cursor, match=pattern, count=count)
            if keys:
                yield list(keys)
            if int(cursor) == 0:
                break
