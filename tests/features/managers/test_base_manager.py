"""Tests for the cache-aside manager, exercised through the client and step managers."""

import pytest
from datetime import timedelta

from recall_commons.core.exceptions import (
    ConflictError,
    EntityNotFoundError,
    InvalidReferenceError,
    StoreRecordMissingError,
)
from recall_commons.features.agents.entities.requests import StepCreate
from recall_commons.features.agents.managers.step_manager import StepManager
from recall_commons.features.cache.entities.config import TTLPolicy
from recall_commons.features.pagination.entities.requests import ListOptions, SortField, SortOrder
from recall_commons.features.tenancy.entities.requests import ClientCreate, ClientUpdate, UserCreate
from recall_commons.features.tenancy.managers.client_manager import ClientManager
from recall_commons.features.tenancy.managers.user_manager import UserManager


@pytest.fixture
def clients(store, cache, metrics):
    return ClientManager(store, cache=cache, metrics=metrics)


def client_key(client_id):
    return f"client:{client_id}"


class TestCacheAsideReads:
    """Create, read and update through the cache."""

    @pytest.mark.asyncio
    async def test_create_stamps_and_caches(self, clients, cache, actor_t1):
        client = await clients.create(ClientCreate(name="Acme", credits=10.0), actor_t1)

        assert client.id.startswith("client-")
        assert client.organization_id == "org-1"
        assert client.created_by_id == "actor-1"
        assert client.last_updated_by_id == "actor-1"
        assert client.created_at is not None
        cached = await cache.get_flat(client_key(client.id))
        assert cached["credits"] == "10.0"
        assert await cache.ttl(client_key(client.id)) == 86400

    @pytest.mark.asyncio
    async def test_read_is_served_from_cache(self, clients, store, metrics, actor_t1):
        created = await clients.create(ClientCreate(name="Acme", credits=10.0), actor_t1)

        client = await clients.read(created.id, actor_t1)

        assert client == created
        assert store.calls_to("find_first") == 0
        assert metrics.hits == 1

    @pytest.mark.asyncio
    async def test_miss_reads_store_and_populates(self, clients, store, cache, metrics, actor_t1):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)
        await cache.delete(client_key(created.id))

        client = await clients.read(created.id, actor_t1)

        assert client.name == "Acme"
        assert store.calls_to("find_first") == 1
        assert metrics.misses == 1
        assert await cache.exists(client_key(created.id))

    @pytest.mark.asyncio
    async def test_update_refreshes_cache(self, clients, cache, actor_t1):
        created = await clients.create(ClientCreate(name="Acme", credits=10.0), actor_t1)

        updated = await clients.update(created.id, ClientUpdate(credits=15), actor_t1)

        assert updated.credits == 15.0
        assert (await cache.get_flat(client_key(created.id)))["credits"] == "15.0"
        assert (await clients.read(created.id, actor_t1)).credits == 15.0

    @pytest.mark.asyncio
    async def test_explicit_none_clears_a_field(self, clients, cache, actor_t1):
        created = await clients.create(ClientCreate(name="Acme", email="ops@acme.io"), actor_t1)

        updated = await clients.update(created.id, ClientUpdate(email=None), actor_t1)

        assert updated.email is None
        assert "email" not in await cache.get_flat(client_key(created.id))

    @pytest.mark.asyncio
    async def test_unset_fields_are_left_alone(self, clients, actor_t1):
        created = await clients.create(ClientCreate(name="Acme", email="ops@acme.io"), actor_t1)

        updated = await clients.update(created.id, ClientUpdate(status="suspended"), actor_t1)

        assert updated.email == "ops@acme.io"
        assert updated.status == "suspended"

    @pytest.mark.asyncio
    async def test_protected_fields_cannot_be_patched(self, clients, actor_t1):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)

        updated = await clients.update(
            created.id,
            {"organization_id": "org-2", "created_by_id": "intruder", "name": "Acme Corp"},
            actor_t1,
        )

        assert updated.organization_id == "org-1"
        assert updated.created_by_id == "actor-1"
        assert updated.name == "Acme Corp"

    @pytest.mark.asyncio
    async def test_read_missing_raises(self, clients, actor_t1):
        with pytest.raises(EntityNotFoundError) as exc_info:
            await clients.read("client-missing", actor_t1)

        assert exc_info.value.identifier == "client-missing"
        assert exc_info.value.entity_type == "Client"

    @pytest.mark.asyncio
    async def test_row_vanishing_before_update_is_not_found(self, clients, store, actor_t1):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)
        del store.rows[created.id]

        with pytest.raises(EntityNotFoundError):
            await clients.update(created.id, ClientUpdate(name="Globex"), actor_t1)


class TestTenantIsolation:
    """Records never leak across organizations, cached or not."""

    @pytest.mark.asyncio
    async def test_cached_record_is_invisible_to_other_tenant(self, clients, cache, metrics, actor_t1, actor_t2):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)
        assert await cache.exists(client_key(created.id))

        with pytest.raises(EntityNotFoundError):
            await clients.read(created.id, actor_t2)

        assert metrics.hits == 0
        assert metrics.misses == 1

    @pytest.mark.asyncio
    async def test_other_tenant_cannot_write(self, clients, actor_t1, actor_t2):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)

        with pytest.raises(EntityNotFoundError):
            await clients.update(created.id, ClientUpdate(name="Hijacked"), actor_t2)
        with pytest.raises(EntityNotFoundError):
            await clients.delete(created.id, actor_t2)
        with pytest.raises(EntityNotFoundError):
            await clients.hard_delete(created.id, actor_t2)

        assert (await clients.read(created.id, actor_t1)).name == "Acme"

    @pytest.mark.asyncio
    async def test_lists_and_counts_are_scoped(self, clients, actor_t1, actor_t2):
        await clients.create(ClientCreate(name="Acme"), actor_t1)
        await clients.create(ClientCreate(name="Initech"), actor_t1)
        await clients.create(ClientCreate(name="Globex"), actor_t2)

        page = await clients.list(actor_t2)

        assert [client.name for client in page.items] == ["Globex"]
        assert page.total == 1
        assert await clients.count(actor_t1) == 2

    @pytest.mark.asyncio
    async def test_read_many_skips_foreign_records(self, clients, actor_t1, actor_t2):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)

        assert await clients.read_many([created.id], actor_t2) == []


class TestDeletes:
    """Soft and hard deletes."""

    @pytest.mark.asyncio
    async def test_soft_delete_hides_record(self, clients, cache, actor_t1):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)

        deleted = await clients.delete(created.id, actor_t1)

        assert deleted.is_deleted is True
        assert not await cache.exists(client_key(created.id))
        with pytest.raises(EntityNotFoundError):
            await clients.read(created.id, actor_t1)
        assert (await clients.read(created.id, actor_t1, include_deleted=True)).is_deleted
        assert not await cache.exists(client_key(created.id))

    @pytest.mark.asyncio
    async def test_soft_deleted_records_leave_lists(self, clients, actor_t1):
        keep = await clients.create(ClientCreate(name="Acme"), actor_t1)
        gone = await clients.create(ClientCreate(name="Initech"), actor_t1)
        await clients.delete(gone.id, actor_t1)

        page = await clients.list(actor_t1)

        assert [client.id for client in page.items] == [keep.id]
        assert await clients.count(actor_t1) == 1
        assert await clients.count(actor_t1, include_deleted=True) == 2
        assert len(await clients.list(actor_t1, ListOptions(include_deleted=True))) == 2

    @pytest.mark.asyncio
    async def test_stale_deleted_cache_entry_is_ignored(self, clients, store, cache, actor_t1):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)
        await cache.set_flat(client_key(created.id), {"id": created.id, "name": "Acme", "is_deleted": "true",
                                                      "organization_id": "org-1"}, ttl=60)

        client = await clients.read(created.id, actor_t1)

        assert client.is_deleted is False
        assert store.calls_to("find_first") == 1

    @pytest.mark.asyncio
    async def test_hard_delete_removes_row(self, clients, store, cache, actor_t1):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)
        await clients.delete(created.id, actor_t1)

        removed = await clients.hard_delete(created.id, actor_t1)

        assert removed.id == created.id
        assert created.id not in store.rows
        assert not await cache.exists(client_key(created.id))
        with pytest.raises(EntityNotFoundError):
            await clients.hard_delete(created.id, actor_t1)


class TestStoreErrorMapping:
    """Constraint violations surface as domain errors."""

    @pytest.mark.asyncio
    async def test_unique_violation_is_conflict(self, store_factory, cache, actor_t1):
        manager = ClientManager(store_factory(unique_fields=("name",)), cache=cache)
        await manager.create(ClientCreate(name="Acme"), actor_t1)

        with pytest.raises(ConflictError) as exc_info:
            await manager.create(ClientCreate(name="Acme"), actor_t1)

        assert exc_info.value.fields == ["name"]

    @pytest.mark.asyncio
    async def test_foreign_key_violation_is_invalid_reference(self, store_factory, cache, actor_t1):
        store = store_factory(references={"client_id": ["client-1"]})
        users = UserManager(store, cache=cache)

        with pytest.raises(InvalidReferenceError) as exc_info:
            await users.create(UserCreate(name="bob", client_id="client-404"), actor_t1)

        assert exc_info.value.field == "client_id"
        assert store.rows == {}

    @pytest.mark.asyncio
    async def test_missing_row_is_not_found(self, clients, store, actor_t1):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)
        store.fail_with = StoreRecordMissingError("clients", {"id": created.id})

        with pytest.raises(EntityNotFoundError):
            await clients.delete(created.id, actor_t1)

    @pytest.mark.asyncio
    async def test_unclassified_errors_propagate(self, store, actor_t1):
        manager = ClientManager(store)
        store.fail_with = RuntimeError("connection reset")

        with pytest.raises(RuntimeError, match="connection reset"):
            await manager.read("client-1", actor_t1)


class TestCacheBypass:
    """Entity types and tiers that skip the cache."""

    @pytest.mark.asyncio
    async def test_steps_are_never_cached(self, store, cache, actor_t1):
        steps = StepManager(store, cache=cache)

        step = await steps.create(StepCreate(agent_id="agent-1", total_tokens=12), actor_t1)
        await steps.read(step.id, actor_t1)
        await steps.read(step.id, actor_t1)

        assert not await cache.exists(f"step:{step.id}")
        assert store.calls_to("find_first") == 2

    @pytest.mark.asyncio
    async def test_zero_ttl_bypasses_cache(self, store, cache, actor_t1):
        manager = ClientManager(store, cache=cache, ttl_policy=TTLPolicy().with_overrides(clients=0))

        created = await manager.create(ClientCreate(name="Acme"), actor_t1)

        assert not await cache.exists(client_key(created.id))

    @pytest.mark.asyncio
    async def test_custom_ttl_is_applied(self, store, cache, actor_t1):
        manager = ClientManager(store, cache=cache, ttl_policy=TTLPolicy().with_overrides(clients=30))

        created = await manager.create(ClientCreate(name="Acme"), actor_t1)

        assert await cache.ttl(client_key(created.id)) == 30

    @pytest.mark.asyncio
    async def test_no_cache_tier(self, store, actor_t1):
        manager = ClientManager(store)

        created = await manager.create(ClientCreate(name="Acme"), actor_t1)

        assert (await manager.read(created.id, actor_t1)).name == "Acme"

    @pytest.mark.asyncio
    async def test_unready_tier_is_bypassed(self, store, cache, metrics, actor_t1):
        manager = ClientManager(store, cache=cache, metrics=metrics)
        await cache.close()

        created = await manager.create(ClientCreate(name="Acme"), actor_t1)
        await manager.read(created.id, actor_t1)

        assert metrics.bypasses == 3
        assert metrics.writes == 0


class TestCacheOutage:
    """Cache failures are absorbed and counted."""

    @pytest.fixture
    def manager(self, store, unavailable_cache, metrics):
        return ClientManager(store, cache=unavailable_cache, metrics=metrics)

    @pytest.mark.asyncio
    async def test_operations_succeed_against_store(self, manager, metrics, actor_t1):
        created = await manager.create(ClientCreate(name="Acme", credits=10.0), actor_t1)
        assert metrics.write_failures == 1

        client = await manager.read(created.id, actor_t1)
        assert client.name == "Acme"
        assert metrics.read_failures == 1
        assert metrics.write_failures == 2

        updated = await manager.update(created.id, ClientUpdate(credits=15), actor_t1)
        assert updated.credits == 15.0

        await manager.delete(created.id, actor_t1)
        assert metrics.eviction_failures >= 1
        assert await manager.count(actor_t1) == 0

    @pytest.mark.asyncio
    async def test_bulk_read_falls_back_to_store(self, manager, store, metrics, actor_t1):
        a = await manager.create(ClientCreate(name="Acme"), actor_t1)
        b = await manager.create(ClientCreate(name="Globex"), actor_t1)

        records = await manager.read_many([a.id, b.id], actor_t1)

        assert [record.name for record in records] == ["Acme", "Globex"]
        assert store.calls_to("find_many") == 1

    @pytest.mark.asyncio
    async def test_invalidation_failures_are_swallowed(self, manager, metrics):
        await manager.invalidate("client-1")
        assert await manager.invalidate_many(["client-1", "client-2"]) == 0
        assert metrics.eviction_failures == 2


class TestListing:
    """Cursor pagination through the manager."""

    @pytest.mark.asyncio
    async def test_pages_cover_every_record_once(self, clients, actor_t1):
        created = [await clients.create(ClientCreate(name=f"client {i}"), actor_t1) for i in range(7)]

        seen = []
        options = ListOptions(limit=3)
        while True:
            page = await clients.list(actor_t1, options)
            assert page.total == 7
            seen.extend(client.id for client in page.items)
            if not page.has_more:
                assert page.next_cursor is None
                break
            assert page.next_cursor == page.items[-1].id
            options = ListOptions(limit=3, cursor=page.next_cursor)

        assert sorted(seen) == sorted(client.id for client in created)
        assert len(seen) == len(set(seen))

    @pytest.mark.asyncio
    async def test_deleting_cursor_row_between_pages_loses_nothing(self, clients, actor_t1):
        created = [await clients.create(ClientCreate(name=f"client {i}"), actor_t1) for i in range(6)]

        first = await clients.list(actor_t1, ListOptions(limit=3))
        await clients.delete(first.next_cursor, actor_t1)
        second = await clients.list(actor_t1, ListOptions(limit=3, cursor=first.next_cursor))

        first_ids = {client.id for client in first.items}
        assert second.total == 5
        assert not second.has_more
        assert {client.id for client in second.items} == {client.id for client in created} - first_ids

    @pytest.mark.asyncio
    async def test_sort_field_and_order(self, clients, actor_t1):
        for name in ("Initech", "Acme", "Globex"):
            await clients.create(ClientCreate(name=name), actor_t1)

        page = await clients.list(actor_t1, ListOptions(sort=SortField("name", SortOrder.ASC)))

        assert [client.name for client in page.items] == ["Acme", "Globex", "Initech"]

    @pytest.mark.asyncio
    async def test_creation_window(self, clients, store, actor_t1):
        old = await clients.create(ClientCreate(name="Acme"), actor_t1)
        new = await clients.create(ClientCreate(name="Globex"), actor_t1)
        store.rows[old.id]["created_at"] = new.created_at - timedelta(days=10)

        page = await clients.list(actor_t1, ListOptions(start_date=new.created_at - timedelta(days=1)))

        assert [client.id for client in page.items] == [new.id]

    @pytest.mark.asyncio
    async def test_list_where_adds_predicates(self, clients, actor_t1):
        await clients.create(ClientCreate(name="Acme", status="active"), actor_t1)
        await clients.create(ClientCreate(name="Globex", status="suspended"), actor_t1)

        page = await clients.list_where(actor_t1, status="suspended")

        assert [client.name for client in page.items] == ["Globex"]

    @pytest.mark.asyncio
    async def test_find_one_caches_result(self, clients, cache, actor_t1, actor_t2):
        created = await clients.create(ClientCreate(name="Acme"), actor_t1)
        await cache.delete(client_key(created.id))

        found = await clients.find_by_name("Acme", actor_t1)

        assert found.id == created.id
        assert await cache.exists(client_key(created.id))
        assert await clients.find_by_name("Acme", actor_t2) is None


class TestBulkCacheOperations:
    """Pipelined reads and invalidation."""

    @pytest.mark.asyncio
    async def test_read_many_mixes_cache_and_store(self, clients, store, cache, metrics, actor_t1):
        a = await clients.create(ClientCreate(name="Acme"), actor_t1)
        b = await clients.create(ClientCreate(name="Globex"), actor_t1)
        c = await clients.create(ClientCreate(name="Initech"), actor_t1)
        await cache.delete(client_key(b.id))

        records = await clients.read_many([c.id, "client-missing", a.id, b.id, a.id], actor_t1)

        assert [record.id for record in records] == [c.id, a.id, b.id]
        assert metrics.hits == 2
        assert store.calls_to("find_many") == 1
        assert await cache.exists(client_key(b.id))

    @pytest.mark.asyncio
    async def test_read_many_empty(self, clients, store):
        assert await clients.read_many([]) == []
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_invalidate_many(self, clients, cache, actor_t1):
        a = await clients.create(ClientCreate(name="Acme"), actor_t1)
        b = await clients.create(ClientCreate(name="Globex"), actor_t1)

        assert await clients.invalidate_many([a.id, b.id, "client-missing"]) == 2
        assert not await cache.exists(client_key(a.id))

    @pytest.mark.asyncio
    async def test_purge_cache_only_touches_own_prefix(self, clients, cache, actor_t1):
        for name in ("Acme", "Globex", "Initech"):
            await clients.create(ClientCreate(name=name), actor_t1)
        await cache.set_flat("user:1", {"name": "bob"}, ttl=60)

        assert await clients.purge_cache() == 3
        assert [batch async for batch in cache.scan("client:*")] == []
        assert await cache.exists("user:1")
