"""Cache configuration for recall-commons."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional

from ....config.constants import CacheTTL
from ....config.settings import CacheSettings


class CacheRepresentation(str, Enum):
    """Physical shape a record takes in the cache tier."""
    
    FLAT = "flat"            # field -> string map
    DOCUMENT = "document"    # nested tree, vectors kept as-is


@dataclass(frozen=True)
class TTLPolicy:
    """Mapping from entity type name to a TTL in seconds.
    
    A type that is absent, or mapped to zero or a negative value, is never
    written to the cache.
    """
    
    ttls: Mapping[str, int] = field(default_factory=CacheTTL.defaults)
    
    @classmethod
    def from_settings(cls, settings: CacheSettings) -> "TTLPolicy":
        return cls(ttls=settings.ttl_mapping())
    
    def ttl_for(self, entity_type: str) -> Optional[int]:
        """Get the TTL for an entity type, or None when caching is bypassed."""
        ttl = self.ttls.get(entity_type)
        if ttl is None or ttl <= 0:
            return None
        return int(ttl)
    
    def with_overrides(self, **overrides: int) -> "TTLPolicy":
        """Return a copy with some entity TTLs replaced."""
        merged: Dict[str, int] = dict(self.ttls)
        merged.update(overrides)
        return TTLPolicy(ttls=merged)


@dataclass(frozen=True)
class CacheConfig:
    """Per-manager cache configuration."""
    
    prefix: str
    ttl: Optional[int] = None
    enabled: bool = True
    representation: CacheRepresentation = CacheRepresentation.FLAT
    
    @property
    def is_active(self) -> bool:
        """Check if records of this type are written to the cache."""
        return self.enabled and self.ttl is not None and self.ttl > 0
    
    def key(self, record_id: str) -> str:
        """Build the cache key for a record."""
        return f"{self.prefix}{record_id}"
    
    def pattern(self) -> str:
        """Scan pattern matching every key of this entity type."""
        return f"{self.prefix}*"
