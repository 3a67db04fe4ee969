"""
Simple TTL cache for GitHub API responses
"""
import time
from typing import Any, Callable, Dict, Optional

from livecards.schemas.outputs import CacheEntry


class TTLCache:
    """Time-to-live cache that keeps expired entries around as a fallback"""

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.cache: Dict[str, CacheEntry] = {}

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        """Get the stored entry regardless of its age"""
        return self.cache.get(key)

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self.clock() - entry.fetched_at < self.ttl_seconds

    def set(self, key: str, value: Any):
        """Set value in cache with current timestamp"""
        self.cache[key] = CacheEntry(data=value, fetched_at=self.clock())

    def __len__(self) -> int:
        return len(self.cache)
