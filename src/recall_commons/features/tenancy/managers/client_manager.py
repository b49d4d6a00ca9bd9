"""Client application manager."""

import logging
from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...managers.base_manager import BaseManager
from ..entities.records import Client
from ..entities.requests import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientManager(BaseManager[Client, ClientCreate, ClientUpdate]):
    """Manages client applications within an organization."""
    
    record_type = Client
    model_name = "Client"
    entity_type = EntityType.CLIENT
    cache_prefix = CacheKeyPrefix.CLIENT
    id_prefix = "client"
    
    async def find_by_name(self, name: str, actor: Optional[ActorContext] = None) -> Optional[Client]:
        return await self.find_one(actor, name=name)
    
    async def adjust_credits(
        self,
        client_id: str,
        delta: float,
        actor: Optional[ActorContext] = None,
    ) -> Client:
        """Add (or with a negative delta, spend) credits.
        
        Read-modify-write without a lock: concurrent adjustments race at the
        store and the last write wins.
        
        Raises:
            ValueError: If the balance would drop below zero
        """
        client = await self.read(client_id, actor)
        balance = client.credits + delta
        if balance < 0:
            raise ValueError(f"Client {client_id} has insufficient credits ({client.credits})")
        logger.debug(f"Adjusting credits of client {client_id} by {delta}")
        return await self.update(client_id, {"credits": balance}, actor)
