"""Memory feature: the five embedding-bearing memory kinds."""

from .entities import (
    MemoryRecord,
    EpisodicEvent,
    SemanticMemoryItem,
    ProceduralMemoryItem,
    ResourceMemoryItem,
    KnowledgeItem,
)
from .managers import (
    MemoryRecordManager,
    EpisodicMemoryManager,
    SemanticMemoryManager,
    ProceduralMemoryManager,
    ResourceMemoryManager,
    KnowledgeMemoryManager,
)

__all__ = [
    "MemoryRecord",
    "EpisodicEvent",
    "SemanticMemoryItem",
    "ProceduralMemoryItem",
    "ResourceMemoryItem",
    "KnowledgeItem",
    "MemoryRecordManager",
    "EpisodicMemoryManager",
    "SemanticMemoryManager",
    "ProceduralMemoryManager",
    "ResourceMemoryManager",
    "KnowledgeMemoryManager",
]
