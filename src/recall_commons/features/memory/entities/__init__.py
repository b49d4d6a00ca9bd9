"""Memory entities."""

from .records import (
    MemoryRecord,
    EpisodicEvent,
    SemanticMemoryItem,
    ProceduralMemoryItem,
    ResourceMemoryItem,
    KnowledgeItem,
)
from .requests import (
    EpisodicEventCreate,
    EpisodicEventUpdate,
    SemanticMemoryCreate,
    SemanticMemoryUpdate,
    ProceduralMemoryCreate,
    ProceduralMemoryUpdate,
    ResourceMemoryCreate,
    ResourceMemoryUpdate,
    KnowledgeItemCreate,
    KnowledgeItemUpdate,
)

__all__ = [
    "MemoryRecord",
    "EpisodicEvent",
    "SemanticMemoryItem",
    "ProceduralMemoryItem",
    "ResourceMemoryItem",
    "KnowledgeItem",
    "EpisodicEventCreate",
    "EpisodicEventUpdate",
    "SemanticMemoryCreate",
    "SemanticMemoryUpdate",
    "ProceduralMemoryCreate",
    "ProceduralMemoryUpdate",
    "ResourceMemoryCreate",
    "ResourceMemoryUpdate",
    "KnowledgeItemCreate",
    "KnowledgeItemUpdate",
]
