"""
Shared fixtures for the vector cache test-suite.

Unit tests run fully in-process: entries live in MemoryEntryRepository and
embeddings come from StaticProvider, so neither Redis nor an LLM backend is
needed.
"""

import os

import pytest

from llm_vector_cache.repositories import MemoryEntryRepository, StaticProvider
from llm_vector_cache.services import ProviderService, SemanticCacheService

# Vectors chosen for exact cosine similarities against VECTOR_A
VECTOR_A = [1.0, 0.0, 0.0]
VECTOR_NEAR = [0.97, (1 - 0.97**2) ** 0.5, 0.0]  # similarity 0.97
VECTOR_FAR = [0.8, 0.6, 0.0]  # similarity 0.80


@pytest.fixture
def test_redis_url() -> str:
    """Redis URL for live tests (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def store() -> MemoryEntryRepository:
    return MemoryEntryRepository()


@pytest.fixture
def provider() -> StaticProvider:
    return StaticProvider(
        name="static",
        vectors={"A": VECTOR_A, "B": VECTOR_NEAR, "C": VECTOR_FAR},
        dimension=3,
        completion="generated answer",
    )


@pytest.fixture
def provider_service(provider: StaticProvider) -> ProviderService:
    return ProviderService([provider], active_provider_name="static", timeout=5)


@pytest.fixture
def cache(store: MemoryEntryRepository, provider_service: ProviderService) -> SemanticCacheService:
    return SemanticCacheService(
        store=store,
        providers=provider_service,
        similarity_threshold=0.95,
        ttl=3600,
        key_prefix="test_cache:",
    )
