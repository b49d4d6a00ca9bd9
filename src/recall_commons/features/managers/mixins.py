"""Actor scoping and input shaping shared by every manager."""

import logging
from contextlib import contextmanager
from dataclasses import is_dataclass
from typing import Any, ClassVar, Dict, FrozenSet, Iterator, Mapping, Optional, Type

from pydantic import BaseModel

from ...core.exceptions import (
    ConflictError,
    DomainError,
    EntityNotFoundError,
    InvalidReferenceError,
)
from ...core.shared.context import ActorContext
from ...utils.datetime import utc_now
from ...utils.ids import generate_record_id
from ..cache.serializers.record_serializer import build_record, record_to_dict
from ..pagination.entities.requests import ListOptions, MemoryListOptions
from .errors import StoreErrorKind, classify_store_error, constraint_fields
from .query import DateRange, QueryFilter

logger = logging.getLogger(__name__)


class ActorScopedMixin:
    """Builds tenant-scoped filters and shapes write payloads.

    Subclasses set ``record_type`` and ``model_name``. Entities that are not
    owned by a tenant, such as the tenant itself, set ``tenant_scoped`` to
    False so actor scoping is skipped.
    """

    record_type: ClassVar[Type[Any]]
    model_name: ClassVar[str] = "Record"
    tenant_scoped: ClassVar[bool] = True
    id_prefix: ClassVar[Optional[str]] = None

    # Fields a patch may never change
    protected_fields: ClassVar[FrozenSet[str]] = frozenset(
        {"id", "organization_id", "created_at", "created_by_id"}
    )

    mapped_store_errors: ClassVar[FrozenSet[StoreErrorKind]] = frozenset(StoreErrorKind)

    # Scoping

    def tenant_id_for(self, actor: Optional[ActorContext]) -> Optional[str]:
        if actor is None or not self.tenant_scoped:
            return None
        return actor.organization_id

    def is_visible(self, record: Any, actor: Optional[ActorContext], include_deleted: bool = False) -> bool:
        """Apply the read filter to a record held in memory."""
        if getattr(record, "is_deleted", False) and not include_deleted:
            return False
        tenant_id = self.tenant_id_for(actor)
        if tenant_id is not None and getattr(record, "organization_id", None) != tenant_id:
            return False
        return True

    def build_read_filter(
        self,
        record_id: str,
        actor: Optional[ActorContext] = None,
        include_deleted: bool = False,
    ) -> QueryFilter:
        return QueryFilter(
            record_id=record_id,
            organization_id=self.tenant_id_for(actor),
            is_deleted=None if include_deleted else False,
        )

    def build_list_filter(self, actor: Optional[ActorContext], options: ListOptions) -> QueryFilter:
        created_range = None
        if options.start_date or options.end_date:
            created_range = DateRange(start=options.start_date, end=options.end_date)
        return QueryFilter(
            organization_id=self.tenant_id_for(actor),
            is_deleted=None if options.include_deleted else False,
            created_range=created_range,
            agent_id=options.agent_id if isinstance(options, MemoryListOptions) else None,
        )

    # Payload shaping

    def input_to_dict(self, payload: Any, partial: bool = False) -> Dict[str, Any]:
        """Convert a create or update input to a plain mapping.

        Pydantic inputs drop unset fields on update so that an explicit None
        clears a value. Dataclass inputs drop None fields.
        """
        if payload is None:
            return {}
        if isinstance(payload, BaseModel):
            if partial:
                return payload.model_dump(exclude_unset=True)
            return payload.model_dump(exclude_none=True)
        if is_dataclass(payload) and not isinstance(payload, type):
            return {k: v for k, v in record_to_dict(payload).items() if v is not None}
        if isinstance(payload, Mapping):
            return dict(payload)
        raise TypeError(f"Unsupported {self.model_name} input: {type(payload).__name__}")

    def prepare_create_data(self, data: Dict[str, Any], actor: Optional[ActorContext] = None) -> Dict[str, Any]:
        """Attach identifiers, timestamps and actor bookkeeping."""
        prepared = dict(data)
        if not prepared.get("id"):
            prepared["id"] = generate_record_id(self.id_prefix)
        now = utc_now()
        prepared.setdefault("created_at", now)
        prepared.setdefault("updated_at", now)
        prepared.setdefault("is_deleted", False)

        if actor is not None:
            prepared.setdefault("created_by_id", actor.id)
            prepared["last_updated_by_id"] = actor.id
            tenant_id = self.tenant_id_for(actor)
            if tenant_id is not None and not prepared.get("organization_id"):
                prepared["organization_id"] = tenant_id
        return prepared

    def prepare_update_data(self, patch: Dict[str, Any], actor: Optional[ActorContext] = None) -> Dict[str, Any]:
        """Strip protected fields and stamp the modification."""
        ignored = self.protected_fields.intersection(patch)
        if ignored:
            logger.debug(f"Ignoring protected {self.model_name} fields in patch: {sorted(ignored)}")
        prepared = {k: v for k, v in patch.items() if k not in self.protected_fields}
        prepared["updated_at"] = utc_now()
        if actor is not None:
            prepared["last_updated_by_id"] = actor.id
        return prepared

    def soft_delete_data(self, actor: Optional[ActorContext] = None) -> Dict[str, Any]:
        data: Dict[str, Any] = {"is_deleted": True, "updated_at": utc_now()}
        if actor is not None:
            data["last_updated_by_id"] = actor.id
        return data

    def to_record(self, row: Mapping[str, Any]) -> Any:
        return build_record(self.record_type, row)

    # Store errors

    def _domain_error(self, kind: StoreErrorKind, error: BaseException, record_id: Optional[str]) -> DomainError:
        if kind == StoreErrorKind.UNIQUE_VIOLATION:
            return ConflictError(self.model_name, constraint_fields(error))
        if kind == StoreErrorKind.FOREIGN_KEY_VIOLATION:
            fields = constraint_fields(error)
            return InvalidReferenceError(self.model_name, fields[0] if fields else None)
        return EntityNotFoundError(self.model_name, record_id or "unknown")

    @contextmanager
    def store_errors(self, operation: str, record_id: Optional[str] = None) -> Iterator[None]:
        """Translate store failures raised inside the block into domain errors.

        Failures without a mapping are logged with context and re-raised
        unchanged.
        """
        try:
            yield
        except DomainError:
            raise
        except Exception as e:
            kind = classify_store_error(e)
            if kind is not None and kind in self.mapped_store_errors:
                raise self._domain_error(kind, e, record_id) from e
            logger.error(
                f"Unexpected store error during {operation} of {self.model_name} "
                f"{record_id or ''}: {type(e).__name__}: {e}",
                exc_info=True,
            )
            raise
