"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
which keeps them testable with in-memory stores and static providers.

Architecture:
    LlmService -> SemanticCacheService -> EntryStore
               -> ProviderService      -> LlmProvider

Usage:
    ```python
    from llm_vector_cache.services import create_llm_service

    # Wire everything from settings (recommended)
    service = create_llm_service()

    # Or manual creation
    providers = ProviderService([OpenAIProvider.create()], active_provider_name="openai")
    cache = SemanticCacheService(store=MemoryEntryRepository(), providers=providers)
    service = LlmService(cache=cache, providers=providers)
    ```
"""

from llm_vector_cache.config import Settings, get_redis_client, settings
from llm_vector_cache.protocols import EntryStore, LlmProvider
from llm_vector_cache.repositories import MemoryEntryRepository, OllamaProvider, OpenAIProvider, RedisEntryRepository

from .cache_service import SemanticCacheService
from .llm_service import LlmService
from .provider_service import ProviderService, select_provider
from .stats_service import CacheStatsService


def build_providers(config: Settings | None = None) -> list[LlmProvider]:
    """Register providers from settings, in selection-fallback order."""
    config = config or settings
    return [
        OpenAIProvider(
            api_key=config.openai_api_key or "",
            base_url=config.openai_base_url,
            embedding_model=config.openai_embedding_model,
            chat_model=config.openai_chat_model,
            timeout=config.provider_timeout,
        ),
        OllamaProvider(
            model_name=config.ollama_model,
            base_url=config.ollama_base_url or "",
            dimension=config.ollama_dimension,
            timeout=config.provider_timeout,
            hash_fallback=config.ollama_hash_fallback,
        ),
    ]


def build_store(config: Settings | None = None) -> EntryStore:
    """Create the entry store named by ``STORE_BACKEND``."""
    config = config or settings
    if config.store_backend == "memory":
        return MemoryEntryRepository()
    return RedisEntryRepository(redis_client=get_redis_client(config))


def create_llm_service(config: Settings | None = None) -> LlmService:
    """Wire store, providers, cache and stats from settings."""
    config = config or settings
    providers = ProviderService(
        build_providers(config),
        active_provider_name=config.llm_provider_active,
        timeout=config.provider_timeout,
    )
    cache = SemanticCacheService(
        store=build_store(config),
        providers=providers,
        similarity_threshold=config.cache_similarity_threshold,
        ttl=config.cache_ttl_seconds,
        key_prefix=config.cache_key_prefix,
    )
    return LlmService(cache=cache, providers=providers, stats=CacheStatsService())


__all__ = [
    "CacheStatsService",
    "LlmService",
    "ProviderService",
    "SemanticCacheService",
    "build_providers",
    "build_store",
    "create_llm_service",
    "select_provider",
]
