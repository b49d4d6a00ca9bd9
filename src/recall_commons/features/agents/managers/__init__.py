"""Agent-side managers."""

from .agent_manager import AgentManager
from .tool_manager import ToolManager
from .message_manager import MessageManager
from .step_manager import StepManager
from .block_manager import BlockManager

__all__ = [
    "AgentManager",
    "ToolManager",
    "MessageManager",
    "StepManager",
    "BlockManager",
]
