"""Hit/miss counters kept outside the cache service."""

import logging
import threading

from llm_vector_cache.entities import CacheStatsEntity

logger = logging.getLogger(__name__)


class CacheStatsService:
    """Thread-safe counters for cache outcomes.

    The caller that consults the cache reports each outcome here, which keeps
    the cache service itself stateless.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def record_hit(self) -> None:
        with self._lock:
            self._hits += 1
            hits, total = self._hits, self._hits + self._misses
        logger.debug("Cache hit recorded. Total: %d, Hits: %d", total, hits)

    def record_miss(self) -> None:
        with self._lock:
            self._misses += 1
            misses, total = self._misses, self._hits + self._misses
        logger.debug("Cache miss recorded. Total: %d, Misses: %d", total, misses)

    def snapshot(self, total_entries: int = 0) -> CacheStatsEntity:
        """Return the current counters combined with an entry count."""
        with self._lock:
            return CacheStatsEntity(
                total_entries=total_entries,
                cache_hits=self._hits,
                cache_misses=self._misses,
            )

    def reset(self) -> None:
        with self._lock:
            self._hits = 0
            self._misses = 0
