"""Thread-safe FIFO cache for resolved lookup results.

Keeps the most recently inserted strings of the active language so repeated
GUI refreshes skip the document walk and template expansion.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - FIFO eviction via OrderedDict: a hit does NOT refresh an entry
    - Keyed by lookup path only; the owner clears the cache whenever the
      language it is scoped to changes

Python 3.13+.
"""

import logging
from collections import OrderedDict
from threading import RLock

from langprovider.constants import CACHE_LIMIT

__all__ = ["LookupCache"]

logger = logging.getLogger(__name__)


class LookupCache:
    """Bounded path -> resolved string cache with first-in-first-out eviction.

    Transparent to caller: get() returns None on miss.

    Attributes:
        maxsize: Maximum number of cache entries
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)
    """

    __slots__ = ("_cache", "_evictions", "_hits", "_lock", "_maxsize", "_misses")

    def __init__(self, maxsize: int = CACHE_LIMIT) -> None:
        """Initialize lookup cache.

        Args:
            maxsize: Maximum number of entries (default: 20)

        Raises:
            ValueError: If maxsize is not positive
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[str, str] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, path: str) -> str | None:
        """Get cached string for path.

        Thread-safe. Insertion order is left untouched on a hit.

        Returns:
            Cached string or None
        """
        with self._lock:
            value = self._cache.get(path)
            if value is None:
                self._misses += 1
                return None
            self._hits += 1
            return value

    def put(self, path: str, value: str) -> None:
        """Store resolved string for path.

        Thread-safe. A new entry that pushes the cache past maxsize evicts
        the single oldest-inserted entry. Re-putting an existing path
        replaces its value in place.
        """
        with self._lock:
            if path in self._cache:
                self._cache[path] = value
                return

            self._cache[path] = value
            if len(self._cache) > self._maxsize:
                evicted, _ = self._cache.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted cached path %r", evicted)

    def clear(self) -> None:
        """Clear all cached entries and reset metrics.

        Thread-safe. Call whenever the scoped language or the resources change.
        """
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def paths(self) -> tuple[str, ...]:
        """Cached paths, oldest first."""
        with self._lock:
            return tuple(self._cache)

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Thread-safe. Returns current metrics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached entries
            - maxsize (int): Maximum cache capacity
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - evictions (int): Entries dropped to respect maxsize
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0

            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "hit_rate": round(hit_rate, 2),
            }

    def __len__(self) -> int:
        """Get current cache size (thread-safe)."""
        with self._lock:
            return len(self._cache)

    def __contains__(self, path: object) -> bool:
        """Check membership without touching hit/miss counters."""
        with self._lock:
            return path in self._cache

    @property
    def maxsize(self) -> int:
        """Maximum cache size."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Number of cache hits (thread-safe)."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses (thread-safe)."""
        with self._lock:
            return self._misses
