"""Tool manager."""

from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...managers.base_manager import BaseManager
from ..entities.records import Tool
from ..entities.requests import ToolCreate, ToolUpdate


class ToolManager(BaseManager[Tool, ToolCreate, ToolUpdate]):
    record_type = Tool
    model_name = "Tool"
    entity_type = EntityType.TOOL
    cache_prefix = CacheKeyPrefix.TOOL
    id_prefix = "tool"
    
    async def find_by_name(self, name: str, actor: Optional[ActorContext] = None) -> Optional[Tool]:
        return await self.find_one(actor, name=name)
