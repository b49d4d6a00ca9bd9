"""Cache settings for recall-commons.

All values come from environment variables prefixed with ``RECALL_CACHE_``
and have defaults, so an unconfigured process simply runs without a cache.
"""

from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import CacheBackend, CacheTTL, EntityType


class CacheSettings(BaseSettings):
    """Cache tier connection, retry and TTL settings."""
    
    model_config = SettingsConfigDict(
        env_prefix="RECALL_CACHE_",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Connection
    enabled: bool = Field(default=False, description="Enable the cache tier")
    backend: CacheBackend = Field(default=CacheBackend.REDIS, description="Cache backend")
    url: Optional[str] = Field(default=None, description="Redis URL, overrides host/port/db")
    host: Optional[str] = Field(default=None, description="Redis host")
    port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    password: Optional[SecretStr] = Field(default=None, description="Redis password")
    db: int = Field(default=0, ge=0, description="Logical database index")
    
    # Retry and timeouts
    max_retries: int = Field(default=3, ge=0, description="Retries per command")
    retry_delay_ms: int = Field(default=100, ge=1, description="Backoff base per retry")
    retry_cap_ms: int = Field(default=3000, ge=1, description="Backoff ceiling")
    connect_timeout_ms: int = Field(default=5000, ge=1, description="Connect timeout")
    command_timeout_ms: int = Field(default=5000, ge=1, description="Command timeout")
    
    # Behaviour
    enable_offline_queue: bool = Field(
        default=True,
        description="Keep sending commands while degraded instead of failing fast",
    )
    lazy_connect: bool = Field(default=False, description="Defer connecting until first command")
    degraded_probe_seconds: float = Field(
        default=5.0, ge=0, description="Seconds before a degraded tier is probed again"
    )
    scan_batch_size: int = Field(default=100, ge=1, description="SCAN COUNT hint")
    
    # TTL policy (seconds, 0 disables caching for the entity type)
    ttl_organizations: int = Field(default=CacheTTL.ORGANIZATION)
    ttl_clients: int = Field(default=CacheTTL.CLIENT)
    ttl_users: int = Field(default=CacheTTL.USER)
    ttl_agents: int = Field(default=CacheTTL.AGENT)
    ttl_tools: int = Field(default=CacheTTL.TOOL)
    ttl_messages: int = Field(default=CacheTTL.MESSAGE)
    ttl_blocks: int = Field(default=CacheTTL.BLOCK)
    ttl_steps: int = Field(default=CacheTTL.STEP)
    ttl_episodic: int = Field(default=CacheTTL.EPISODIC)
    ttl_semantic: int = Field(default=CacheTTL.SEMANTIC)
    ttl_procedural: int = Field(default=CacheTTL.PROCEDURAL)
    ttl_resource: int = Field(default=CacheTTL.RESOURCE)
    ttl_knowledge: int = Field(default=CacheTTL.KNOWLEDGE)
    
    @property
    def is_configured(self) -> bool:
        """Check if a cache tier should be created at all."""
        if not self.enabled:
            return False
        if self.backend == CacheBackend.MEMORY:
            return True
        return bool(self.url or self.host)
    
    def ttl_mapping(self) -> Dict[str, int]:
        """TTL per entity type name."""
        return {
            entity_type.value: getattr(self, f"ttl_{entity_type.value}")
            for entity_type in EntityType
        }


@lru_cache()
def get_cache_settings() -> CacheSettings:
    """Get cached cache settings instance."""
    return CacheSettings()
