"""LLM service: the cache-aware entry point for generating responses.

Flow per request:
    1. Ask the cache for a response.
    2. On a hit, record it and return the cached text.
    3. On a miss, record it, ask the active provider for a completion, write
       the result back to the cache, and return it.

Cache failures never fail a request. Provider failures during completion do,
because there is no response to return.
"""

import logging
from typing import Any

from llm_vector_cache.entities import CacheStatsEntity
from llm_vector_cache.services.cache_service import SemanticCacheService
from llm_vector_cache.services.provider_service import ProviderService
from llm_vector_cache.services.stats_service import CacheStatsService

logger = logging.getLogger(__name__)


class LlmService:
    """Generate responses through the semantic cache.

    Example:
        ```python
        service = create_llm_service()
        answer = await service.generate_response("Explain TTLs", {"model": "gpt-4o-mini"})
        stats = await service.get_statistics()
        ```
    """

    def __init__(
        self,
        cache: SemanticCacheService,
        providers: ProviderService,
        stats: CacheStatsService | None = None,
    ) -> None:
        """Initialize the LLM service.

        Args:
            cache: The semantic cache (required).
            providers: Provider service used for completions (required).
            stats: Outcome counters. A fresh one is created if omitted.
        """
        self._cache = cache
        self._providers = providers
        self._stats = stats or CacheStatsService()

    async def generate_response(self, prompt: str, options: dict[str, Any] | None = None) -> str:
        """Return a cached or freshly generated response for the prompt.

        Args:
            prompt: The user prompt
            options: Provider options. Also stored as entry metadata.

        Returns:
            The response text

        Raises:
            VectorCacheError: If the provider cannot produce a completion
        """
        options = options or {}

        cached = await self._cache.get(prompt)
        if cached is not None:
            logger.info("Cache hit for prompt")
            self._stats.record_hit()
            return cached

        logger.info("Cache miss, calling LLM")
        self._stats.record_miss()
        response = await self._providers.complete(prompt, options)

        # TODO: coalesce concurrent misses for the same prompt so only one completion runs
        await self._cache.set(prompt, response, metadata=options)
        return response

    async def get_statistics(self) -> CacheStatsEntity:
        """Combine outcome counters with the store's entry count."""
        entries = await self._cache.get_stats()
        return self._stats.snapshot(total_entries=entries.total_entries)

    def evict_expired(self) -> None:
        self._cache.evict_expired()

    async def close(self) -> None:
        """Close providers and the entry store."""
        await self._providers.close()
        await self._cache.store.close()

    @property
    def cache(self) -> SemanticCacheService:
        return self._cache

    @property
    def stats(self) -> CacheStatsService:
        return self._stats
