"""Entry store protocol.

Defines the interface for any key-value backend that can persist serialized
cache entries with a per-key expiration.

Implementations:
- Redis (default)
- In-process memory (tests, demos, single-process deployments)
"""

from typing import Protocol, runtime_checkable

from llm_vector_cache.entities import CacheEntryEntity


@runtime_checkable
class EntryStore(Protocol):
    """Protocol for cache entry storage backends.

    The store is the sole authority on expiration: ``get`` and ``scan_keys``
    never return expired entries, and callers never inspect timestamps.

    Connection failures are raised as ``StoreUnavailableError``.
    """

    async def put(self, key: str, entry: CacheEntryEntity, ttl: int) -> None:
        """Upsert an entry, resetting its expiration.

        Args:
            key: The storage key (prefix + entry id)
            entry: The entry to store
            ttl: Time-to-live in seconds
        """
        ...

    async def get(self, key: str) -> CacheEntryEntity | None:
        """Fetch a live entry.

        Args:
            key: The storage key

        Returns:
            The entry, or None if it was never written or has expired
        """
        ...

    async def scan_keys(self, prefix: str) -> set[str]:
        """Return all live keys under a prefix.

        Args:
            prefix: Key prefix to match

        Returns:
            Set of keys (iteration order unspecified)
        """
        ...

    async def count(self, prefix: str) -> int:
        """Count live entries under a prefix."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete a specific entry.

        Returns:
            True if an entry was deleted, False otherwise
        """
        ...

    async def clear(self, prefix: str) -> int:
        """Delete all entries under a prefix.

        Returns:
            Number of entries deleted
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable. Never raises."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        ...
