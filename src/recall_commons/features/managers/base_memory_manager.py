"""Manager for embedding-bearing memory records.

Shares actor scoping and cursor pagination with the cache-aside manager but
has no cache tier dependency. Memory records carry large vectors, so
concrete managers decide when a record is worth caching.
"""

import logging
from abc import ABC
from typing import Any, ClassVar, FrozenSet, Generic, Optional, TypeVar

from ...core.exceptions import EntityNotFoundError
from ...core.shared.context import ActorContext
from ..pagination.entities.requests import ListOptions, MemoryListOptions
from ..pagination.entities.responses import ListResult
from ..pagination.mixins.repository import CursorPaginationMixin
from .errors import StoreErrorKind
from .mixins import ActorScopedMixin
from .protocols import StoreDelegate

logger = logging.getLogger(__name__)

T = TypeVar("T")
CreateT = TypeVar("CreateT")
UpdateT = TypeVar("UpdateT")


class BaseMemoryManager(ActorScopedMixin, CursorPaginationMixin, ABC, Generic[T, CreateT, UpdateT]):
    """Store-only CRUD manager for memory records.

    Only uniqueness violations and missing rows are mapped to domain errors.
    Anything else from the store is logged and re-raised unchanged.
    """

    mapped_store_errors: ClassVar[FrozenSet[StoreErrorKind]] = frozenset(
        {StoreErrorKind.UNIQUE_VIOLATION, StoreErrorKind.RECORD_MISSING}
    )

    def __init__(self, delegate: StoreDelegate):
        self.delegate = delegate

    async def create(self, payload: CreateT, actor: Optional[ActorContext] = None) -> T:
        data = self.prepare_create_data(self.input_to_dict(payload), actor)
        with self.store_errors("create", data["id"]):
            row = await self.delegate.create(data)
        logger.info(f"Created {self.model_name} {data['id']}")
        return self.to_record(row)

    async def read(
        self,
        record_id: str,
        actor: Optional[ActorContext] = None,
        include_deleted: bool = False,
    ) -> T:
        where = self.build_read_filter(record_id, actor, include_deleted).to_where()
        with self.store_errors("read", record_id):
            row = await self.delegate.find_first(where)
        if row is None:
            raise EntityNotFoundError(self.model_name, record_id)
        return self.to_record(row)

    async def update(self, record_id: str, patch: UpdateT, actor: Optional[ActorContext] = None) -> T:
        await self.read(record_id, actor)
        data = self.prepare_update_data(self.input_to_dict(patch, partial=True), actor)
        with self.store_errors("update", record_id):
            row = await self.delegate.update({"id": record_id}, data)
        logger.info(f"Updated {self.model_name} {record_id}")
        return self.to_record(row)

    async def delete(self, record_id: str, actor: Optional[ActorContext] = None) -> T:
        await self.read(record_id, actor)
        with self.store_errors("delete", record_id):
            row = await self.delegate.update({"id": record_id}, self.soft_delete_data(actor))
        logger.info(f"Soft deleted {self.model_name} {record_id}")
        return self.to_record(row)

    async def hard_delete(self, record_id: str, actor: Optional[ActorContext] = None) -> T:
        await self.read(record_id, actor, include_deleted=True)
        with self.store_errors("hard_delete", record_id):
            row = await self.delegate.delete({"id": record_id})
        logger.info(f"Hard deleted {self.model_name} {record_id}")
        return self.to_record(row)

    async def list(
        self,
        actor: Optional[ActorContext] = None,
        options: Optional[ListOptions] = None,
    ) -> ListResult[T]:
        """List memory records, optionally narrowed to one agent."""
        return await self.list_where(actor, options)

    async def list_where(
        self,
        actor: Optional[ActorContext] = None,
        options: Optional[ListOptions] = None,
        **predicates: Any,
    ) -> ListResult[T]:
        options = options or MemoryListOptions()
        where = self.build_list_filter(actor, options).with_equals(**predicates).to_where()
        with self.store_errors("list"):
            page = await self.fetch_page(self.delegate, where, options)
        return page.map(self.to_record)

    async def find_one(self, actor: Optional[ActorContext] = None, **predicates: Any) -> Optional[T]:
        where = self.build_list_filter(actor, MemoryListOptions()).with_equals(**predicates).to_where()
        with self.store_errors("find_one"):
            row = await self.delegate.find_first(where)
        return self.to_record(row) if row is not None else None

    async def count(
        self,
        actor: Optional[ActorContext] = None,
        include_deleted: bool = False,
        agent_id: Optional[str] = None,
    ) -> int:
        options = MemoryListOptions(include_deleted=include_deleted, agent_id=agent_id)
        where = self.build_list_filter(actor, options).to_where()
        with self.store_errors("count"):
            return await self.delegate.count(where)
