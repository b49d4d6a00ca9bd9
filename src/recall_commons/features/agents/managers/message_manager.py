"""Message manager."""

from typing import Optional

from ....config.constants import CacheKeyPrefix, EntityType
from ....core.shared.context import ActorContext
from ...managers.base_manager import BaseManager
from ...pagination.entities.requests import ListOptions, MemoryListOptions
from ...pagination.entities.responses import ListResult
from ..entities.records import Message
from ..entities.requests import MessageCreate, MessageUpdate


class MessageManager(BaseManager[Message, MessageCreate, MessageUpdate]):
    """Manages conversational messages.
    
    Messages are written once and read often while building an agent's
    context window, so they are cached in the flat form with a short TTL.
    """
    
    record_type = Message
    model_name = "Message"
    entity_type = EntityType.MESSAGE
    cache_prefix = CacheKeyPrefix.MESSAGE
    id_prefix = "message"
    
    async def list_for_agent(
        self,
        agent_id: str,
        actor: Optional[ActorContext] = None,
        options: Optional[ListOptions] = None,
    ) -> ListResult[Message]:
        """List an agent's messages, newest first unless options say otherwise."""
        return await self.list(actor, MemoryListOptions.for_agent(agent_id, options))
