"""Database feature: store delegates for the authoritative store."""

from .adapters import AsyncpgStoreDelegate

__all__ = ["AsyncpgStoreDelegate"]
