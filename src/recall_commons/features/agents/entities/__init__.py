"""Agent-side entities."""

from .records import Agent, Tool, Message, Step, Block
from .requests import (
    AgentCreate,
    AgentUpdate,
    ToolCreate,
    ToolUpdate,
    MessageCreate,
    MessageUpdate,
    StepCreate,
    StepUpdate,
    BlockCreate,
    BlockUpdate,
)

__all__ = [
    "Agent",
    "Tool",
    "Message",
    "Step",
    "Block",
    "AgentCreate",
    "AgentUpdate",
    "ToolCreate",
    "ToolUpdate",
    "MessageCreate",
    "MessageUpdate",
    "StepCreate",
    "StepUpdate",
    "BlockCreate",
    "BlockUpdate",
]
