"""Memory managers."""

from .memory_manager import MemoryRecordManager
from .episodic_manager import EpisodicMemoryManager
from .semantic_manager import SemanticMemoryManager
from .procedural_manager import ProceduralMemoryManager
from .resource_manager import ResourceMemoryManager
from .knowledge_manager import KnowledgeMemoryManager

__all__ = [
    "MemoryRecordManager",
    "EpisodicMemoryManager",
    "SemanticMemoryManager",
    "ProceduralMemoryManager",
    "ResourceMemoryManager",
    "KnowledgeMemoryManager",
]
