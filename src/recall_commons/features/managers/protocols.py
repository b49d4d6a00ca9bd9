"""Store delegate protocol consumed by managers."""

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class StoreDelegate(Protocol):
    """Per-entity access to the authoritative store.
    
    Rows are plain dicts keyed by snake_case field names. ``where`` maps a
    field to a value or to an operator mapping such as
    ``{"gte": start, "lte": end}``. ``cursor`` names a row by a unique column
    and returns only rows ordered strictly after it, whether or not the
    cursor row itself still matches ``where``.
    """
    
    async def find_unique(self, where: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        ...
    
    async def find_first(self, where: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        ...
    
    async def find_many(
        self,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Optional[Sequence[Mapping[str, str]]] = None,
        take: Optional[int] = None,
        skip: Optional[int] = None,
        cursor: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        ...
    
    async def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        ...
    
    async def update(self, where: Mapping[str, Any], data: Mapping[str, Any]) -> Dict[str, Any]:
        ...
    
    async def delete(self, where: Mapping[str, Any]) -> Dict[str, Any]:
        ...
    
    async def count(self, where: Optional[Mapping[str, Any]] = None) -> int:
        ...
