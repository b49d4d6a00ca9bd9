"""Constants and enums for recall-commons.

Cache key prefixes and default TTLs are process-wide: every manager for an
entity type writes under the same prefix with the same expiry.
"""

from enum import Enum
from typing import Dict, Final


class CacheBackend(str, Enum):
    """Supported cache tier backends."""
    
    REDIS = "redis"
    MEMORY = "memory"


class EntityType(str, Enum):
    """Entity type names used as TTL policy keys."""
    
    ORGANIZATION = "organizations"
    CLIENT = "clients"
    USER = "users"
    AGENT = "agents"
    TOOL = "tools"
    MESSAGE = "messages"
    BLOCK = "blocks"
    STEP = "steps"
    EPISODIC = "episodic"
    SEMANTIC = "semantic"
    PROCEDURAL = "procedural"
    RESOURCE = "resource"
    KNOWLEDGE = "knowledge"


class CacheKeyPrefix:
    """Cache key prefixes, one per entity type."""
    
    # Flat records
    ORGANIZATION: Final[str] = "org:"
    CLIENT: Final[str] = "client:"
    USER: Final[str] = "user:"
    AGENT: Final[str] = "agent:"
    TOOL: Final[str] = "tool:"
    MESSAGE: Final[str] = "msg:"
    BLOCK: Final[str] = "block:"
    STEP: Final[str] = "step:"
    
    # Document records
    EPISODIC: Final[str] = "episodic:"
    SEMANTIC: Final[str] = "semantic:"
    PROCEDURAL: Final[str] = "procedural:"
    RESOURCE: Final[str] = "resource:"
    KNOWLEDGE: Final[str] = "knowledge:"


class CacheTTL:
    """Default cache TTL values in seconds. Zero disables caching."""
    
    ORGANIZATION: Final[int] = 86400   # 24 hours
    CLIENT: Final[int] = 86400         # 24 hours
    USER: Final[int] = 7200            # 2 hours
    AGENT: Final[int] = 3600           # 1 hour
    TOOL: Final[int] = 3600            # 1 hour
    MESSAGE: Final[int] = 1800         # 30 minutes
    BLOCK: Final[int] = 3600           # 1 hour
    STEP: Final[int] = 0
    EPISODIC: Final[int] = 3600        # 1 hour
    SEMANTIC: Final[int] = 7200        # 2 hours
    PROCEDURAL: Final[int] = 7200      # 2 hours
    RESOURCE: Final[int] = 7200        # 2 hours
    KNOWLEDGE: Final[int] = 14400      # 4 hours
    
    @classmethod
    def defaults(cls) -> Dict[str, int]:
        """Default TTL per entity type name."""
        return {
            EntityType.ORGANIZATION.value: cls.ORGANIZATION,
            EntityType.CLIENT.value: cls.CLIENT,
            EntityType.USER.value: cls.USER,
            EntityType.AGENT.value: cls.AGENT,
            EntityType.TOOL.value: cls.TOOL,
            EntityType.MESSAGE.value: cls.MESSAGE,
            EntityType.BLOCK.value: cls.BLOCK,
            EntityType.STEP.value: cls.STEP,
            EntityType.EPISODIC.value: cls.EPISODIC,
            EntityType.SEMANTIC.value: cls.SEMANTIC,
            EntityType.PROCEDURAL.value: cls.PROCEDURAL,
            EntityType.RESOURCE.value: cls.RESOURCE,
            EntityType.KNOWLEDGE.value: cls.KNOWLEDGE,
        }


class PaginationDefaults:
    """Cursor pagination defaults."""
    
    DEFAULT_LIMIT: Final[int] = 50
    MAX_LIMIT: Final[int] = 1000
    DEFAULT_SORT_FIELD: Final[str] = "created_at"


class StoreErrorCodes:
    """PostgreSQL SQLSTATE codes classified by the managers."""
    
    UNIQUE_VIOLATION: Final[str] = "23505"
    FOREIGN_KEY_VIOLATION: Final[str] = "23503"
