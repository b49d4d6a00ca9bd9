"""Create and update inputs for memory records."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class MemoryCreate(BaseModel):
    id: Optional[str] = None
    organization_id: Optional[str] = None
    agent_id: Optional[str] = None
    user_id: Optional[str] = None
    client_id: Optional[str] = None
    embedding_config: Dict[str, Any] = Field(default_factory=dict)


class EpisodicEventCreate(MemoryCreate):
    occurred_at: datetime
    actor: str
    event_type: str
    summary: str
    details: str = ""
    tree_path: List[str] = Field(default_factory=list)
    summary_embedding: Optional[List[float]] = None
    details_embedding: Optional[List[float]] = None


class EpisodicEventUpdate(BaseModel):
    summary: Optional[str] = None
    details: Optional[str] = None
    tree_path: Optional[List[str]] = None
    summary_embedding: Optional[List[float]] = None
    details_embedding: Optional[List[float]] = None


class SemanticMemoryCreate(MemoryCreate):
    name: str
    summary: str
    details: str = ""
    source: Optional[str] = None
    tree_path: List[str] = Field(default_factory=list)
    name_embedding: Optional[List[float]] = None
    summary_embedding: Optional[List[float]] = None
    details_embedding: Optional[List[float]] = None


class SemanticMemoryUpdate(BaseModel):
    name: Optional[str] = None
    summary: Optional[str] = None
    details: Optional[str] = None
    source: Optional[str] = None
    name_embedding: Optional[List[float]] = None
    summary_embedding: Optional[List[float]] = None
    details_embedding: Optional[List[float]] = None


class ProceduralMemoryCreate(MemoryCreate):
    entry_type: str
    summary: str
    steps: List[str] = Field(default_factory=list)
    tree_path: List[str] = Field(default_factory=list)
    summary_embedding: Optional[List[float]] = None
    steps_embedding: Optional[List[float]] = None


class ProceduralMemoryUpdate(BaseModel):
    summary: Optional[str] = None
    steps: Optional[List[str]] = None
    summary_embedding: Optional[List[float]] = None
    steps_embedding: Optional[List[float]] = None


class ResourceMemoryCreate(MemoryCreate):
    title: str
    summary: str
    resource_type: str
    content: str = ""
    tree_path: List[str] = Field(default_factory=list)
    summary_embedding: Optional[List[float]] = None


class ResourceMemoryUpdate(BaseModel):
    title: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    summary_embedding: Optional[List[float]] = None


class KnowledgeItemCreate(MemoryCreate):
    entry_type: str
    caption: str
    source: Optional[str] = None
    sensitivity: str = "low"
    secret_value: Optional[str] = None
    caption_embedding: Optional[List[float]] = None


class KnowledgeItemUpdate(BaseModel):
    caption: Optional[str] = None
    sensitivity: Optional[str] = None
    secret_value: Optional[str] = None
    caption_embedding: Optional[List[float]] = None
