"""Agent feature: agents, tools, messages, steps and core memory blocks."""

from .entities import Agent, Tool, Message, Step, Block
from .managers import AgentManager, ToolManager, MessageManager, StepManager, BlockManager

__all__ = [
    "Agent",
    "Tool",
    "Message",
    "Step",
    "Block",
    "AgentManager",
    "ToolManager",
    "MessageManager",
    "StepManager",
    "BlockManager",
]
