"""Tests for the in-process cache tier."""

import pytest

from recall_commons.core.exceptions import CacheOperationError, CacheUnavailableError
from recall_commons.features.cache.adapters.memory_adapter import MemoryCacheTier
from recall_commons.features.cache.entities.protocols import CacheTier


class TestMemoryCacheTierFlat:
    """Flat record commands."""

    def test_satisfies_protocol(self, cache):
        assert isinstance(cache, CacheTier)

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache):
        await cache.set_flat("client:1", {"name": "Acme", "credits": "10.0"}, ttl=60)

        assert await cache.get_flat("client:1") == {"name": "Acme", "credits": "10.0"}

    @pytest.mark.asyncio
    async def test_set_replaces_previous_fields(self, cache):
        await cache.set_flat("client:1", {"name": "Acme", "email": "a@acme.io"}, ttl=60)
        await cache.set_flat("client:1", {"name": "Acme"}, ttl=60)

        assert await cache.get_flat("client:1") == {"name": "Acme"}

    @pytest.mark.asyncio
    async def test_missing_key_is_none(self, cache):
        assert await cache.get_flat("client:missing") is None

    @pytest.mark.asyncio
    async def test_all_empty_values_read_as_missing(self, cache):
        await cache.set_flat("client:1", {"name": ""}, ttl=60)

        assert await cache.get_flat("client:1") is None

    @pytest.mark.asyncio
    async def test_entries_expire(self, cache, clock):
        await cache.set_flat("client:1", {"name": "Acme"}, ttl=60)

        clock.advance(59)
        assert await cache.ttl("client:1") == 1
        assert await cache.exists("client:1")

        clock.advance(1)
        assert await cache.get_flat("client:1") is None
        assert not await cache.exists("client:1")

    @pytest.mark.asyncio
    async def test_no_ttl_means_no_expiry(self, cache, clock):
        await cache.set_flat("client:1", {"name": "Acme"})

        clock.advance(10 ** 6)
        assert await cache.get_flat("client:1") == {"name": "Acme"}
        assert await cache.ttl("client:1") is None

    @pytest.mark.asyncio
    async def test_get_fields(self, cache):
        await cache.set_flat("client:1", {"name": "Acme", "credits": "10.0"}, ttl=60)

        values = await cache.get_flat_fields("client:1", ["credits", "email"])

        assert values == ["10.0", None]

    @pytest.mark.asyncio
    async def test_get_many_skips_missing_and_documents(self, cache):
        await cache.set_flat("client:1", {"name": "Acme"}, ttl=60)
        await cache.set_document("client:2", {"name": "Globex"}, ttl=60)

        records = await cache.get_many_flat(["client:1", "client:2", "client:3"])

        assert records == {"client:1": {"name": "Acme"}}

    @pytest.mark.asyncio
    async def test_get_many_skips_all_empty_hashes(self, cache):
        await cache.set_flat("client:1", {"name": "Acme"}, ttl=60)
        await cache.set_flat("client:2", {"name": "", "email": ""}, ttl=60)

        records = await cache.get_many_flat(["client:1", "client:2"])

        assert records == {"client:1": {"name": "Acme"}}

    @pytest.mark.asyncio
    async def test_wrong_representation_raises(self, cache):
        await cache.set_document("episodic:1", {"summary": "x"}, ttl=60)

        with pytest.raises(CacheOperationError):
            await cache.get_flat("episodic:1")


class TestMemoryCacheTierDocuments:
    """Document record commands."""

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache):
        tree = {"summary": "x", "summary_embedding": [0.1, 0.2], "tree_path": ["a"]}
        await cache.set_document("episodic:1", tree, ttl=60)

        assert await cache.get_document("episodic:1") == tree

    @pytest.mark.asyncio
    async def test_path_reads(self, cache):
        await cache.set_document(
            "episodic:1",
            {"summary": "x", "tree_path": ["work", "meetings"], "last_modify": {"operation": "created"}},
            ttl=60,
        )

        assert await cache.get_document_path("episodic:1", "$.summary") == "x"
        assert await cache.get_document_path("episodic:1", "tree_path.1") == "meetings"
        assert await cache.get_document_path("episodic:1", "$.last_modify.operation") == "created"
        assert await cache.get_document_path("episodic:1", "$.nope") is None
        assert await cache.get_document_path("episodic:missing", "$.summary") is None

    @pytest.mark.asyncio
    async def test_non_json_document_raises(self, cache):
        with pytest.raises(CacheOperationError):
            await cache.set_document("episodic:1", {"bad": object()}, ttl=60)

    @pytest.mark.asyncio
    async def test_stored_document_is_a_copy(self, cache):
        tree = {"tree_path": ["a"]}
        await cache.set_document("episodic:1", tree, ttl=60)
        tree["tree_path"].append("b")

        assert await cache.get_document("episodic:1") == {"tree_path": ["a"]}


class TestMemoryCacheTierKeys:
    """Key-level commands and lifecycle."""

    @pytest.mark.asyncio
    async def test_delete(self, cache):
        await cache.set_flat("client:1", {"name": "Acme"}, ttl=60)

        assert await cache.delete("client:1") is True
        assert await cache.delete("client:1") is False

    @pytest.mark.asyncio
    async def test_delete_many_counts_existing(self, cache):
        await cache.set_flat("client:1", {"name": "Acme"}, ttl=60)
        await cache.set_flat("client:2", {"name": "Globex"}, ttl=60)

        assert await cache.delete_many(["client:1", "client:2", "client:3"]) == 2

    @pytest.mark.asyncio
    async def test_scan_yields_matching_keys_in_batches(self, clock):
        cache = MemoryCacheTier(clock=clock, scan_batch_size=2)
        for i in range(5):
            await cache.set_flat(f"msg:{i}", {"text": "hi"}, ttl=60)
        await cache.set_flat("client:1", {"name": "Acme"}, ttl=60)

        batches = [batch async for batch in cache.scan("msg:*")]

        assert [len(batch) for batch in batches] == [2, 2, 1]
        assert sorted(key for batch in batches for key in batch) == [f"msg:{i}" for i in range(5)]

    @pytest.mark.asyncio
    async def test_scan_allows_deleting_while_iterating(self, cache):
        for i in range(3):
            await cache.set_flat(f"msg:{i}", {"text": "hi"}, ttl=60)

        async for batch in cache.scan("msg:*", batch_size=1):
            await cache.delete_many(batch)

        assert not await cache.exists("msg:0")
        assert not await cache.exists("msg:2")

    @pytest.mark.asyncio
    async def test_closed_tier_is_unavailable(self, cache):
        await cache.close()

        assert cache.is_ready is False
        with pytest.raises(CacheUnavailableError):
            await cache.get_flat("client:1")

        await cache.connect()
        assert await cache.ping() is True


class TestMemoryCacheTierExpirySweep:
    """Expired entries that are never read again are still dropped."""

    @pytest.mark.asyncio
    async def test_writes_after_interval_sweep_expired_keys(self, clock):
        cache = MemoryCacheTier(clock=clock)
        for i in range(10_000):
            await cache.set_flat(f"msg:{i}", {"text": "hello"}, ttl=1)

        clock.advance(3600)
        for i in range(10):
            await cache.set_flat(f"msg:new-{i}", {"text": "hello"}, ttl=60)

        assert cache.connection_info()["keys"] == 10

    @pytest.mark.asyncio
    async def test_sweep_every_n_writes(self, clock):
        cache = MemoryCacheTier(clock=clock, cleanup_every=5, cleanup_interval=10 ** 6)
        for i in range(3):
            await cache.set_document(f"episodic:{i}", {"summary": "x"}, ttl=1)

        clock.advance(2)
        await cache.set_flat("client:1", {"name": "Acme"}, ttl=60)
        assert cache.connection_info()["keys"] == 4

        await cache.set_flat("client:2", {"name": "Globex"}, ttl=60)
        assert cache.connection_info()["keys"] == 2

    @pytest.mark.asyncio
    async def test_sweep_keeps_live_and_persistent_entries(self, clock):
        cache = MemoryCacheTier(clock=clock, cleanup_every=1)
        await cache.set_flat("org:1", {"name": "Acme"})
        await cache.set_flat("client:1", {"name": "Acme"}, ttl=600)
        await cache.set_flat("msg:1", {"text": "hi"}, ttl=1)

        clock.advance(5)
        await cache.set_flat("msg:2", {"text": "hey"}, ttl=60)

        assert cache.connection_info()["keys"] == 3
        assert await cache.get_flat("org:1") == {"name": "Acme"}
        assert await cache.get_flat("client:1") == {"name": "Acme"}
