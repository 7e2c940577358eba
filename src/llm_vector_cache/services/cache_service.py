"""Semantic cache service for core business logic.

This service orchestrates lookups and write-backs by coordinating the entry
store (data access) and the provider service (vector generation).

Lookup:
    1. Exact check: fetch ``prefix + md5(prompt)`` from the store.
    2. Embed the query with the active provider.
    3. Scan every live key under the prefix and score each stored vector.
    4. Keep the best score that is also at or above the threshold.

Failures anywhere in the cache path degrade to a miss (lookups) or a dropped
write (write-backs). The caller then behaves as if no cache existed.

The scan is brute force: every semantic miss costs one store round-trip per
live entry. A vector index would be needed for large caches.
"""

import logging
from typing import Any

from llm_vector_cache.config import settings
from llm_vector_cache.entities import CacheEntryEntity, CacheMatchEntity, CacheStatsEntity, prompt_id
from llm_vector_cache.errors import EntryDecodeError, StoreUnavailableError, VectorCacheError
from llm_vector_cache.protocols import EntryStore
from llm_vector_cache.services.provider_service import ProviderService
from llm_vector_cache.similarity import cosine_similarity, is_finite_vector

logger = logging.getLogger(__name__)


class SemanticCacheService:
    """Core cache orchestration service.

    Depends on PROTOCOLS, not concrete implementations:
    - EntryStore: Redis, in-memory, etc.
    - ProviderService: wraps whichever LlmProvider was selected

    The service keeps no mutable state of its own. Hit and miss counting is
    left to the caller (see ``CacheStatsService``).

    Example:
        ```python
        cache = SemanticCacheService.create(
            store=RedisEntryRepository.create(),
            providers=ProviderService([OpenAIProvider.create()]),
        )
        response = await cache.get("What is a semantic cache?")
        if response is None:
            response = await providers.complete(prompt)
            await cache.set(prompt, response)
        ```
    """

    def __init__(
        self,
        store: EntryStore,
        providers: ProviderService,
        similarity_threshold: float | None = None,
        ttl: int | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            store: Entry store backend (required).
            providers: Provider service used for embeddings (required).
            similarity_threshold: Minimum cosine similarity for a semantic hit. Defaults to settings.
            ttl: Time-to-live for entries in seconds. Defaults to settings.
            key_prefix: Prefix for every cache key. Defaults to settings.
        """
        self._store = store
        self._providers = providers
        self._threshold = settings.cache_similarity_threshold if similarity_threshold is None else similarity_threshold
        self._ttl = ttl or settings.cache_ttl_seconds
        self._prefix = key_prefix or settings.cache_key_prefix

    @classmethod
    def create(
        cls,
        store: EntryStore,
        providers: ProviderService,
        similarity_threshold: float | None = None,
        ttl: int | None = None,
        key_prefix: str | None = None,
    ) -> "SemanticCacheService":
        """Factory method to create SemanticCacheService with settings defaults."""
        return cls(
            store=store,
            providers=providers,
            similarity_threshold=similarity_threshold,
            ttl=ttl,
            key_prefix=key_prefix,
        )

    def key_for(self, prompt: str) -> str:
        """Return the store key for a prompt."""
        return f"{self._prefix}{prompt_id(prompt)}"

    async def get(self, prompt: str) -> str | None:
        """Return a cached response for the prompt, or None on a miss."""
        match = await self.find_match(prompt)
        return match.response if match else None

    async def find_match(self, prompt: str) -> CacheMatchEntity | None:
        """Look up a prompt, exact match first, then by similarity.

        Args:
            prompt: The prompt to search for

        Returns:
            CacheMatchEntity if found, None otherwise. Never raises for
            store or provider failures.
        """
        exact = await self._exact_match(prompt)
        if exact is not None:
            logger.debug("Exact cache hit for prompt")
            return exact

        try:
            query_vector = await self._providers.embed(prompt)
        except VectorCacheError as e:
            logger.warning("Could not embed query, treating as cache miss: %s", e)
            return None

        if not is_finite_vector(query_vector):
            logger.warning("Query embedding is empty or not finite, treating as cache miss")
            return None

        try:
            match = await self._semantic_search(query_vector)
        except StoreUnavailableError as e:
            logger.error("Entry store unavailable during semantic search: %s", e)
            return None

        if match is not None:
            logger.debug("Semantic cache hit with similarity: %.4f", match.similarity)
        return match

    async def _exact_match(self, prompt: str) -> CacheMatchEntity | None:
        try:
            entry = await self._store.get(self.key_for(prompt))
        except (StoreUnavailableError, EntryDecodeError) as e:
            logger.error("Error getting exact match: %s", e)
            return None

        if entry is None:
            return None
        return CacheMatchEntity(
            prompt=entry.prompt,
            response=entry.response,
            similarity=1.0,
            match_type="exact",
            metadata=entry.metadata,
        )

    async def _semantic_search(self, query_vector: list[float]) -> CacheMatchEntity | None:
        keys = await self._store.scan_keys(self._prefix)
        if not keys:
            return None

        best_similarity = float("-inf")
        best_entry: CacheEntryEntity | None = None

        for key in keys:
            try:
                entry = await self._store.get(key)
            except EntryDecodeError as e:
                logger.error("Skipping unreadable entry %s: %s", key, e)
                continue

            # Expired between scan and fetch, or not comparable with the query
            if entry is None or len(entry.vector) != len(query_vector) or not is_finite_vector(entry.vector):
                continue

            similarity = cosine_similarity(query_vector, entry.vector)
            if similarity > best_similarity and similarity >= self._threshold:
                best_similarity = similarity
                best_entry = entry

        if best_entry is None:
            return None
        return CacheMatchEntity(
            prompt=best_entry.prompt,
            response=best_entry.response,
            similarity=best_similarity,
            match_type="semantic",
            metadata=best_entry.metadata,
        )

    async def set(self, prompt: str, response: str, metadata: dict[str, Any] | None = None) -> bool:
        """Embed the prompt and store the prompt-response pair.

        The prompt is always re-embedded, even if a lookup just embedded it.

        Args:
            prompt: The original prompt text
            response: The response to cache
            metadata: Optional metadata (model, options, etc.)

        Returns:
            True if the entry was stored, False if the write was dropped
        """
        try:
            vector = await self._providers.embed(prompt)
            entry = CacheEntryEntity.create(prompt, response, vector, metadata)
            key = self.key_for(prompt)
            await self._store.put(key, entry, self._ttl)
        except VectorCacheError as e:
            logger.error("Error caching response: %s", e)
            return False

        logger.debug("Cached response for prompt with key: %s", key)
        return True

    def evict_expired(self) -> None:
        """Placeholder for an application-level sweep.

        Expiration is handled entirely by the store's TTL, so there is
        nothing to do here.
        """
        logger.info("Running cache cleanup (expiration is handled by store TTL)")

    async def get_stats(self) -> CacheStatsEntity:
        """Get entry counts, zero-valued if the store is unreachable."""
        try:
            total = await self._store.count(self._prefix)
        except StoreUnavailableError as e:
            logger.error("Error getting cache stats: %s", e)
            total = 0
        return CacheStatsEntity(total_entries=total)

    async def clear(self) -> int:
        """Delete every entry under the cache prefix.

        Returns:
            Number of entries deleted
        """
        return await self._store.clear(self._prefix)

    async def is_healthy(self) -> bool:
        """True if the store is reachable and a provider is active."""
        store_healthy = await self._store.health_check()
        return store_healthy and self._providers.active_provider is not None

    @property
    def threshold(self) -> float:
        """Get the minimum similarity for a semantic hit."""
        return self._threshold

    @property
    def ttl(self) -> int:
        return self._ttl

    @property
    def key_prefix(self) -> str:
        return self._prefix

    @property
    def store(self) -> EntryStore:
        """Get the underlying store (for testing)."""
        return self._store

    @property
    def providers(self) -> ProviderService:
        return self._providers
