"""Agent-side records: agents, tools, messages, steps and memory blocks."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ....core.shared.records import BaseRecord


@dataclass(kw_only=True)
class Agent(BaseRecord):
    name: str
    agent_type: str = "chat_agent"
    description: Optional[str] = None
    system: Optional[str] = None
    llm_config: Dict[str, Any] = field(default_factory=dict)
    tool_ids: List[str] = field(default_factory=list)
    parent_id: Optional[str] = None


@dataclass(kw_only=True)
class Tool(BaseRecord):
    name: str
    description: Optional[str] = None
    tool_type: str = "custom"
    tags: List[str] = field(default_factory=list)
    source_type: str = "python"
    source_code: Optional[str] = None
    json_schema: Dict[str, Any] = field(default_factory=dict)
    return_char_limit: int = 6000


@dataclass(kw_only=True)
class Message(BaseRecord):
    agent_id: str
    role: str
    text: Optional[str] = None
    content: List[Dict[str, Any]] = field(default_factory=list)
    model: Optional[str] = None
    name: Optional[str] = None
    tool_calls: List[Dict[str, Any]] = field(default_factory=list)
    tool_call_id: Optional[str] = None
    step_id: Optional[str] = None
    user_id: Optional[str] = None


@dataclass(kw_only=True)
class Step(BaseRecord):
    """Accounting for one model call. Steps are never cached."""
    
    agent_id: Optional[str] = None
    provider_name: Optional[str] = None
    model: Optional[str] = None
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass(kw_only=True)
class Block(BaseRecord):
    """A labelled section of an agent's core memory."""
    
    label: str
    value: str = ""
    limit: int = 5000
    description: Optional[str] = None
    read_only: bool = False
    user_id: Optional[str] = None
