"""LLM Vector Cache - semantic response caching for generative backends.

Requests whose prompt was seen before (exact hash match) or is close enough
in embedding space (cosine similarity above a threshold) are answered from
the cache instead of calling the backend.

Layers:
    - protocols: Interface contracts (EntryStore, LlmProvider)
    - repositories: Store and provider implementations
    - services: Provider selection, cache engine, stats, LLM service
    - entities: Domain models (internal)

Usage:
    ```python
    from llm_vector_cache import create_llm_service

    service = create_llm_service()
    answer = await service.generate_response("What is a vector cache?")
    ```
"""

from llm_vector_cache.config import Settings, get_redis_client, settings, setup_logging
from llm_vector_cache.entities import CacheEntryEntity, CacheMatchEntity, CacheStatsEntity, prompt_id
from llm_vector_cache.errors import (
    EntryDecodeError,
    InvalidInputError,
    InvalidVectorError,
    NoProviderAvailableError,
    ProviderTimeoutError,
    ProviderTransportError,
    ProviderUnavailableError,
    StoreUnavailableError,
    VectorCacheError,
)
from llm_vector_cache.protocols import EntryStore, LlmProvider
from llm_vector_cache.repositories import (
    MemoryEntryRepository,
    OllamaProvider,
    OpenAIProvider,
    RedisEntryRepository,
    StaticProvider,
)
from llm_vector_cache.services import (
    CacheStatsService,
    LlmService,
    ProviderService,
    SemanticCacheService,
    create_llm_service,
)
from llm_vector_cache.similarity import cosine_similarity

__all__ = [
    # Configuration
    "Settings",
    "settings",
    "get_redis_client",
    "setup_logging",
    # Protocols (interfaces)
    "EntryStore",
    "LlmProvider",
    # Services (business logic)
    "SemanticCacheService",
    "ProviderService",
    "CacheStatsService",
    "LlmService",
    "create_llm_service",
    # Repositories (data access)
    "RedisEntryRepository",
    "MemoryEntryRepository",
    "OpenAIProvider",
    "OllamaProvider",
    "StaticProvider",
    # Entities (domain models)
    "CacheEntryEntity",
    "CacheMatchEntity",
    "CacheStatsEntity",
    "prompt_id",
    # Matching
    "cosine_similarity",
    # Errors
    "VectorCacheError",
    "InvalidInputError",
    "InvalidVectorError",
    "NoProviderAvailableError",
    "ProviderUnavailableError",
    "ProviderTransportError",
    "ProviderTimeoutError",
    "StoreUnavailableError",
    "EntryDecodeError",
]
