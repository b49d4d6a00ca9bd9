"""Create and update inputs for agent-side records."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AgentCreate(BaseModel):
    id: Optional[str] = None
    organization_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    agent_type: str = "chat_agent"
    description: Optional[str] = None
    system: Optional[str] = None
    llm_config: Dict[str, Any] = Field(default_factory=dict)
    tool_ids: List[str] = Field(default_factory=list)
    parent_id: Optional[str] = None


class AgentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    system: Optional[str] = None
    llm_config: Optional[Dict[str, Any]] = None
    tool_ids: Optional[List[str]] = None


class ToolCreate(BaseModel):
    id: Optional[str] = None
    organization_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    tool_type: str = "custom"
    tags: List[str] = Field(default_factory=list)
    source_type: str = "python"
    source_code: Optional[str] = None
    json_schema: Dict[str, Any] = Field(default_factory=dict)
    return_char_limit: int = Field(default=6000, ge=1)


class ToolUpdate(BaseModel):
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    source_code: Optional[str] = None
    json_schema: Optional[Dict[str, Any]] = None
    return_char_limit: Optional[int] = Field(default=None, ge=1)


class MessageCreate(BaseModel):
    id: Optional[str] = None
    organization_id: Optional[str] = None
    agent_id: str
    role: str
    text: Optional[str] = None
    content: List[Dict[str, Any]] = Field(default_factory=list)
    model: Optional[str] = None
    name: Optional[str] = None
    tool_calls: List[Dict[str, Any]] = Field(default_factory=list)
    tool_call_id: Optional[str] = None
    step_id: Optional[str] = None
    user_id: Optional[str] = None


class MessageUpdate(BaseModel):
    text: Optional[str] = None
    content: Optional[List[Dict[str, Any]]] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None


class StepCreate(BaseModel):
    id: Optional[str] = None
    organization_id: Optional[str] = None
    agent_id: Optional[str] = None
    provider_name: Optional[str] = None
    model: Optional[str] = None
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class StepUpdate(BaseModel):
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class BlockCreate(BaseModel):
    id: Optional[str] = None
    organization_id: Optional[str] = None
    label: str = Field(..., min_length=1)
    value: str = ""
    limit: int = Field(default=5000, ge=1)
    description: Optional[str] = None
    read_only: bool = False
    user_id: Optional[str] = None


class BlockUpdate(BaseModel):
    value: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    description: Optional[str] = None
