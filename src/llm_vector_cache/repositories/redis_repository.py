"""Redis implementation of EntryStore.

Each cache entry is one Redis string holding the JSON-serialized entry, with
Redis-native expiration attached at write time:

    SET <prefix><md5(prompt)> <entry json> EX <ttl>

There is no vector index. Semantic lookups enumerate keys with SCAN, which
makes a cache miss O(live entries).
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from llm_vector_cache.config import get_redis_client
from llm_vector_cache.entities import CacheEntryEntity
from llm_vector_cache.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class RedisEntryRepository:
    """Redis implementation using plain string keys with TTL.

    This class satisfies the EntryStore protocol through structural
    typing - no explicit inheritance needed.

    All Redis errors are re-raised as ``StoreUnavailableError`` so callers
    can degrade without knowing about redis-py.
    """

    def __init__(self, redis_client: redis.Redis | None = None, scan_count: int = 500) -> None:
        """Initialize the Redis entry repository.

        Args:
            redis_client: asyncio Redis client. If None, creates default.
            scan_count: COUNT hint passed to SCAN.
        """
        self._client = redis_client or get_redis_client()
        self._scan_count = scan_count

    @classmethod
    def create(cls, redis_client: redis.Redis | None = None) -> "RedisEntryRepository":
        """Factory method to create RedisEntryRepository with defaults.

        Args:
            redis_client: Redis client. If None, built from settings.

        Returns:
            Configured RedisEntryRepository
        """
        return cls(redis_client=redis_client)

    async def put(self, key: str, entry: CacheEntryEntity, ttl: int) -> None:
        """Store an entry in Redis, overwriting any previous value and TTL.

        Args:
            key: The storage key
            entry: The entry to store
            ttl: Time-to-live in seconds
        """
        try:
            await self._client.set(key, entry.to_json(), ex=ttl)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to store key {key!r}: {e}", {"key": key}) from e

    async def get(self, key: str) -> CacheEntryEntity | None:
        """Fetch an entry from Redis.

        Args:
            key: The storage key

        Returns:
            The entry, or None if missing or expired

        Raises:
            StoreUnavailableError: If Redis is unreachable
            EntryDecodeError: If the stored value is not a valid entry
        """
        try:
            data = await self._client.get(key)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to read key {key!r}: {e}", {"key": key}) from e

        if data is None:
            return None
        return CacheEntryEntity.from_json(data)

    async def scan_keys(self, prefix: str) -> set[str]:
        """Return all live keys under a prefix using SCAN.

        Args:
            prefix: Key prefix to match

        Returns:
            Set of matching keys
        """
        keys: set[str] = set()
        try:
            async for key in self._client.scan_iter(match=f"{prefix}*", count=self._scan_count):
                keys.add(key.decode() if isinstance(key, bytes) else key)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to scan keys under {prefix!r}: {e}") from e
        return keys

    async def count(self, prefix: str) -> int:
        """Count live entries under a prefix.

        Returns:
            Number of matching keys
        """
        return len(await self.scan_keys(prefix))

    async def delete(self, key: str) -> bool:
        """Delete a specific entry by key.

        Returns:
            True if deleted, False otherwise
        """
        try:
            result: int = await self._client.delete(key)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to delete key {key!r}: {e}", {"key": key}) from e
        return result > 0

    async def clear(self, prefix: str) -> int:
        """Delete all entries under a prefix.

        Returns:
            Number of entries deleted
        """
        keys = await self.scan_keys(prefix)
        if not keys:
            return 0
        try:
            deleted: int = await self._client.delete(*keys)
        except RedisError as e:
            raise StoreUnavailableError(f"Failed to clear keys under {prefix!r}: {e}") from e
        return deleted

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("Redis health check failed: %s", e)
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
