"""Agent manager."""

from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...managers.base_manager import BaseManager
from ...pagination.entities.requests import ListOptions
from ...pagination.entities.responses import ListResult
from ..entities.records import Agent
from ..entities.requests import AgentCreate, AgentUpdate


class AgentManager(BaseManager[Agent, AgentCreate, AgentUpdate]):
    """Manages agents. Tool ids and LLM config are stored as JSON in the flat cache form."""
    
    record_type = Agent
    model_name = "Agent"
    entity_type = EntityType.AGENT
    cache_prefix = CacheKeyPrefix.AGENT
    id_prefix = "agent"
    
    async def find_children(
        self,
        parent_id: str,
        actor: Optional[ActorContext] = None,
        options: Optional[ListOptions] = None,
    ) -> ListResult[Agent]:
        """List the sub-agents of a meta agent."""
        return await self.list_where(actor, options, parent_id=parent_id)
