"""In-memory implementation of EntryStore.

Keeps entries in a dict with absolute expiry times. Expired entries are
treated as absent and dropped lazily on access. Suitable for tests, demos
and single-process deployments; nothing survives a restart.
"""

import asyncio
import time
from collections.abc import Callable

from llm_vector_cache.entities import CacheEntryEntity


class MemoryEntryRepository:
    """Dict-backed implementation of the EntryStore protocol."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize an empty store.

        Args:
            clock: Time source in seconds, injectable for expiry tests.
        """
        self._entries: dict[str, tuple[CacheEntryEntity, float]] = {}
        self._clock = clock
        self._lock = asyncio.Lock()

    def _is_live(self, expires_at: float) -> bool:
        return self._clock() < expires_at

    def _purge_expired(self) -> None:
        expired = [key for key, (_, expires_at) in self._entries.items() if not self._is_live(expires_at)]
        for key in expired:
            del self._entries[key]

    async def put(self, key: str, entry: CacheEntryEntity, ttl: int) -> None:
        async with self._lock:
            self._entries[key] = (entry, self._clock() + ttl)

    async def get(self, key: str) -> CacheEntryEntity | None:
        async with self._lock:
            item = self._entries.get(key)
            if item is None:
                return None
            entry, expires_at = item
            if not self._is_live(expires_at):
                del self._entries[key]
                return None
            return entry

    async def scan_keys(self, prefix: str) -> set[str]:
        async with self._lock:
            self._purge_expired()
            return {key for key in self._entries if key.startswith(prefix)}

    async def count(self, prefix: str) -> int:
        return len(await self.scan_keys(prefix))

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._entries.pop(key, None) is not None

    async def clear(self, prefix: str) -> int:
        async with self._lock:
            self._purge_expired()
            keys = [key for key in self._entries if key.startswith(prefix)]
            for key in keys:
                del self._entries[key]
            return len(keys)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        async with self._lock:
            self._entries.clear()
