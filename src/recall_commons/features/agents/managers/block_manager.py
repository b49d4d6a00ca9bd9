"""Core memory block manager."""

from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...managers.base_manager import BaseManager
from ..entities.records import Block
from ..entities.requests import BlockCreate, BlockUpdate


class BlockManager(BaseManager[Block, BlockCreate, BlockUpdate]):
    record_type = Block
    model_name = "Block"
    entity_type = EntityType.BLOCK
    cache_prefix = CacheKeyPrefix.BLOCK
    id_prefix = "block"
    
    async def find_by_label(
        self,
        label: str,
        actor: Optional[ActorContext] = None,
        user_id: Optional[str] = None,
    ) -> Optional[Block]:
        if user_id is None:
            return await self.find_one(actor, label=label)
        return await self.find_one(actor, label=label, user_id=user_id)
