"""Counters for cache activity absorbed by managers.

Cache failures never fail a manager operation, so they are counted here
in addition to being logged. Tests assert on the counts.
"""

from dataclasses import asdict, dataclass, fields
from typing import Dict


@dataclass
class CacheMetrics:
    """In-process cache counters."""

    hits: int = 0
    misses: int = 0
    bypasses: int = 0
    writes: int = 0
    write_failures: int = 0
    read_failures: int = 0
    evictions: int = 0
    eviction_failures: int = 0

    def record_hit(self) -> None:
        self.hits += 1

    def record_miss(self) -> None:
        self.misses += 1

    def record_bypass(self) -> None:
        self.bypasses += 1

    def record_write(self) -> None:
        self.writes += 1

    def record_write_failure(self) -> None:
        self.write_failures += 1

    def record_read_failure(self) -> None:
        self.read_failures += 1

    def record_eviction(self) -> None:
        self.evictions += 1

    def record_eviction_failure(self) -> None:
        self.eviction_failures += 1

    @property
    def failures(self) -> int:
        return self.write_failures + self.read_failures + self.eviction_failures

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0

    def snapshot(self) -> Dict[str, int]:
        """Get a copy of the counters."""
        return asdict(self)

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, 0)
