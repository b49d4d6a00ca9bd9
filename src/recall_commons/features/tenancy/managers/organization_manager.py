"""Organization manager."""

from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...managers.base_manager import BaseManager
from ..entities.records import Organization
from ..entities.requests import OrganizationCreate, OrganizationUpdate


class OrganizationManager(BaseManager[Organization, OrganizationCreate, OrganizationUpdate]):
    """Manages tenants.
    
    Organizations are the tenant boundary themselves, so reads and lists are
    never filtered by the actor's organization.
    """
    
    record_type = Organization
    model_name = "Organization"
    entity_type = EntityType.ORGANIZATION
    cache_prefix = CacheKeyPrefix.ORGANIZATION
    tenant_scoped = False
    id_prefix = "org"
    
    async def find_by_name(self, name: str, actor: Optional[ActorContext] = None) -> Optional[Organization]:
        return await self.find_one(actor, name=name)
