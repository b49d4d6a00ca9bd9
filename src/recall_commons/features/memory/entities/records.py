"""Memory records.

Each kind carries one or more fixed-length embedding vectors. They are
cached, when at all, in the document form so vectors keep their shape.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ....core.shared.records import BaseRecord

Embedding = List[float]


@dataclass(kw_only=True)
class MemoryRecord(BaseRecord):
    """Ownership and embedding configuration shared by memory kinds."""
    
    agent_id: Optional[str] = None
    user_id: Optional[str] = None
    client_id: Optional[str] = None
    embedding_config: Dict[str, Any] = field(default_factory=dict)
    last_modify: Dict[str, Any] = field(default_factory=dict)


@dataclass(kw_only=True)
class EpisodicEvent(MemoryRecord):
    occurred_at: datetime
    actor: str
    event_type: str
    summary: str
    details: str = ""
    tree_path: List[str] = field(default_factory=list)
    summary_embedding: Optional[Embedding] = None
    details_embedding: Optional[Embedding] = None


@dataclass(kw_only=True)
class SemanticMemoryItem(MemoryRecord):
    name: str
    summary: str
    details: str = ""
    source: Optional[str] = None
    tree_path: List[str] = field(default_factory=list)
    name_embedding: Optional[Embedding] = None
    summary_embedding: Optional[Embedding] = None
    details_embedding: Optional[Embedding] = None


@dataclass(kw_only=True)
class ProceduralMemoryItem(MemoryRecord):
    entry_type: str
    summary: str
    steps: List[str] = field(default_factory=list)
    tree_path: List[str] = field(default_factory=list)
    summary_embedding: Optional[Embedding] = None
    steps_embedding: Optional[Embedding] = None


@dataclass(kw_only=True)
class ResourceMemoryItem(MemoryRecord):
    title: str
    summary: str
    resource_type: str
    content: str = ""
    tree_path: List[str] = field(default_factory=list)
    summary_embedding: Optional[Embedding] = None


@dataclass(kw_only=True)
class KnowledgeItem(MemoryRecord):
    entry_type: str
    caption: str
    source: Optional[str] = None
    sensitivity: str = "low"
    secret_value: Optional[str] = None
    caption_embedding: Optional[Embedding] = None
