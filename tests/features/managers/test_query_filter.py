"""Tests for store filters, list options and store error classification."""

import pytest
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Optional

from pydantic import BaseModel

from recall_commons.core.exceptions import (
    StoreForeignKeyViolationError,
    StoreRecordMissingError,
    StoreUniqueViolationError,
)
from recall_commons.core.shared.context import AccessPermission, ActorContext
from recall_commons.features.managers.errors import (
    StoreErrorKind,
    classify_store_error,
    constraint_fields,
)
from recall_commons.features.managers.query import DateRange, QueryFilter
from recall_commons.features.pagination.entities.requests import (
    ListOptions,
    MemoryListOptions,
    SortField,
    SortOrder,
)
from recall_commons.features.pagination.entities.responses import ListResult
from recall_commons.features.tenancy.managers.client_manager import ClientManager
from recall_commons.features.tenancy.managers.organization_manager import OrganizationManager


JAN = datetime(2026, 1, 1, tzinfo=timezone.utc)
FEB = datetime(2026, 2, 1, tzinfo=timezone.utc)


class TestDateRange:
    """Inclusive creation windows."""

    def test_bounds(self):
        assert DateRange(JAN, FEB).to_where() == {"gte": JAN, "lte": FEB}
        assert DateRange(start=JAN).to_where() == {"gte": JAN}
        assert DateRange().is_open

    def test_inverted_range_is_rejected(self):
        with pytest.raises(ValueError):
            DateRange(FEB, JAN)


class TestQueryFilter:
    """Rendering of explicit predicates."""

    def test_empty_filter(self):
        assert QueryFilter().to_where() == {}

    def test_all_predicates(self):
        where = QueryFilter(
            record_id="client-1",
            organization_id="org-1",
            is_deleted=False,
            created_range=DateRange(JAN, FEB),
            agent_id="agent-1",
        ).to_where()

        assert where == {
            "id": "client-1",
            "organization_id": "org-1",
            "is_deleted": False,
            "created_at": {"gte": JAN, "lte": FEB},
            "agent_id": "agent-1",
        }

    def test_open_range_is_omitted(self):
        assert "created_at" not in QueryFilter(created_range=DateRange()).to_where()

    def test_with_equals_returns_copy(self):
        base = QueryFilter(organization_id="org-1")
        narrowed = base.with_equals(status="active")

        assert narrowed.to_where() == {"organization_id": "org-1", "status": "active"}
        assert base.to_where() == {"organization_id": "org-1"}

    def test_reserved_predicates_cannot_be_shadowed(self):
        with pytest.raises(ValueError, match="organization_id"):
            QueryFilter(organization_id="org-1").with_equals(organization_id="org-2")


class TestListOptions:
    """Validation of pagination options."""

    def test_defaults(self):
        options = ListOptions()

        assert options.limit == 50
        assert options.sort == SortField("created_at", SortOrder.DESC)
        assert options.cursor is None

    @pytest.mark.parametrize("limit", [0, -1, 1001])
    def test_limit_bounds(self, limit):
        with pytest.raises(ValueError):
            ListOptions(limit=limit)

    def test_inverted_dates_are_rejected(self):
        with pytest.raises(ValueError):
            ListOptions(start_date=FEB, end_date=JAN)

    def test_empty_sort_field_is_rejected(self):
        with pytest.raises(ValueError):
            SortField("")

    def test_for_agent_keeps_options(self):
        options = ListOptions(cursor="msg-9", limit=5, include_deleted=True)

        narrowed = MemoryListOptions.for_agent("agent-1", options)

        assert narrowed.agent_id == "agent-1"
        assert narrowed.cursor == "msg-9"
        assert narrowed.limit == 5
        assert narrowed.include_deleted is True

    def test_list_result_map(self):
        result = ListResult(items=[1, 2], total=5, has_more=True, next_cursor="2")

        mapped = result.map(str)

        assert mapped.items == ["1", "2"]
        assert (mapped.total, mapped.has_more, mapped.next_cursor) == (5, True, "2")
        assert len(mapped) == 2


class TestActorScoping:
    """Filters built from the actor context."""

    @pytest.fixture
    def manager(self, store):
        return ClientManager(store)

    def test_read_filter(self, manager, actor_t1):
        where = manager.build_read_filter("client-1", actor_t1).to_where()

        assert where == {"id": "client-1", "organization_id": "org-1", "is_deleted": False}

    def test_read_filter_with_deleted(self, manager, actor_t1):
        where = manager.build_read_filter("client-1", actor_t1, include_deleted=True).to_where()

        assert "is_deleted" not in where

    def test_without_actor_nothing_is_scoped(self, manager):
        assert manager.build_read_filter("client-1").to_where() == {"id": "client-1", "is_deleted": False}

    def test_list_filter(self, manager, actor_t1):
        options = MemoryListOptions(agent_id="agent-1", start_date=JAN)

        where = manager.build_list_filter(actor_t1, options).to_where()

        assert where == {
            "organization_id": "org-1",
            "is_deleted": False,
            "created_at": {"gte": JAN},
            "agent_id": "agent-1",
        }

    def test_tenants_are_not_scoped_by_tenant(self, store, actor_t1):
        where = OrganizationManager(store).build_read_filter("org-2", actor_t1).to_where()

        assert "organization_id" not in where

    def test_order_by_breaks_ties_on_id(self, manager):
        assert manager.build_order_by(ListOptions()) == [{"created_at": "desc"}, {"id": "desc"}]
        assert manager.build_order_by(ListOptions(sort=SortField("id", SortOrder.ASC))) == [{"id": "asc"}]

    def test_create_data_keeps_explicit_id(self, manager, actor_t1):
        data = manager.prepare_create_data({"id": "client-fixed", "name": "Acme"}, actor_t1)

        assert data["id"] == "client-fixed"
        assert data["organization_id"] == "org-1"
        assert data["is_deleted"] is False
        assert data["created_at"] == data["updated_at"]

    def test_unsupported_input_is_rejected(self, manager):
        with pytest.raises(TypeError):
            manager.input_to_dict(42)

    def test_pydantic_create_drops_none(self, manager):
        class Payload(BaseModel):
            name: str
            email: Optional[str] = None

        assert manager.input_to_dict(Payload(name="Acme")) == {"name": "Acme"}


class TestActorContext:
    """Actor permissions."""

    def test_admin_holds_every_permission(self):
        admin = ActorContext.for_tenant("a", "org-1", permissions=[AccessPermission.ADMIN])

        assert admin.has_permission(AccessPermission.DELETE)
        assert admin.is_tenant_scoped

    def test_plain_permissions(self):
        reader = ActorContext(id="a", permissions=frozenset({AccessPermission.READ}))

        assert reader.has_permission(AccessPermission.READ)
        assert not reader.has_permission(AccessPermission.WRITE)
        assert not reader.is_tenant_scoped


class TestStoreErrorClassification:
    """Mapping of store failures onto error kinds."""

    def test_delegate_errors(self):
        assert classify_store_error(StoreUniqueViolationError("dup")) == StoreErrorKind.UNIQUE_VIOLATION
        assert classify_store_error(StoreForeignKeyViolationError("fk")) == StoreErrorKind.FOREIGN_KEY_VIOLATION
        assert classify_store_error(StoreRecordMissingError("clients")) == StoreErrorKind.RECORD_MISSING

    def test_sqlstate(self):
        class DriverError(Exception):
            def __init__(self, sqlstate):
                self.sqlstate = sqlstate

        assert classify_store_error(DriverError("23505")) == StoreErrorKind.UNIQUE_VIOLATION
        assert classify_store_error(DriverError("23503")) == StoreErrorKind.FOREIGN_KEY_VIOLATION
        assert classify_store_error(DriverError("40001")) is None

    def test_unrelated_errors(self):
        assert classify_store_error(RuntimeError("boom")) is None

    def test_constraint_fields(self):
        assert constraint_fields(StoreUniqueViolationError("dup", constraint="name")) == ["name"]
        assert constraint_fields(SimpleNamespace(constraint_name="clients_email_key")) == ["clients_email_key"]
        assert constraint_fields(RuntimeError("boom")) == []
