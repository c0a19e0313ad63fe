"""In-process implementation of CacheStore.

Backed by a ``cachetools.TLRUCache`` so every entry carries its own expiry.
Expired entries are purged on each write, and the least recently used entry
is evicted once ``maxsize`` is reached.
"""

import threading
import time
from collections.abc import Callable

from cachetools import TLRUCache


def _expires_at(key: str, entry: tuple[int, str], now: float) -> float:
    ttl, _ = entry
    return now + ttl


class InMemoryCacheRepository:
    """TLRUCache-backed CacheStore.

    Useful for tests and single-process tools where running Redis is not
    worth it. cachetools caches are not thread-safe, so a lock guards
    every access.

    Example:
        ```python
        store = InMemoryCacheRepository(maxsize=1000)
        store.set("google_distance_matrix_abc", "{...}", ttl=300)
        ```
    """

    def __init__(self, maxsize: int = 10000, clock: Callable[[], float] = time.time) -> None:
        """Initialize the repository.

        Args:
            maxsize: Maximum number of entries kept before LRU eviction.
            clock: Time source in seconds. Tests can pass a fake clock.
        """
        self._cache: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_expires_at, timer=clock)
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._cache.get(key)
            return entry[1] if entry is not None else None

    def set(self, key: str, value: str, ttl: int) -> None:
        with self._lock:
            self._cache[key] = (ttl, value)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    def delete_by_prefix(self, prefix: str) -> int:
        with self._lock:
            self._cache.expire()
            keys = [key for key in list(self._cache.keys()) if key.startswith(prefix)]
            for key in keys:
                del self._cache[key]
            return len(keys)

    def health_check(self) -> bool:
        return True

    def count_all(self) -> int:
        """Count live (unexpired) entries."""
        with self._lock:
            self._cache.expire()
            return len(self._cache)

    def get_stats(self) -> dict:
        """Live entries, entries held in memory (including not yet purged) and capacity."""
        with self._lock:
            stored = self._cache.currsize
        return {
            "backend": "memory",
            "total_entries": self.count_all(),
            "stored_entries": stored,
            "max_entries": self._cache.maxsize,
        }
