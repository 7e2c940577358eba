"""Repository layer for data access.

This layer hides external dependencies (Redis, LLM HTTP APIs) behind the
protocol-based interfaces in ``llm_vector_cache.protocols``:

- Entry stores: ``RedisEntryRepository``, ``MemoryEntryRepository``
- Providers: ``OpenAIProvider``, ``OllamaProvider``, ``StaticProvider``

Implementations satisfy the protocols structurally, not by inheritance.
"""

from llm_vector_cache.protocols import EntryStore, LlmProvider

from .memory_repository import MemoryEntryRepository
from .ollama_provider import OllamaProvider
from .openai_provider import OpenAIProvider
from .redis_repository import RedisEntryRepository
from .static_provider import StaticProvider

__all__ = [
    "EntryStore",
    "LlmProvider",
    "MemoryEntryRepository",
    "RedisEntryRepository",
    "OpenAIProvider",
    "OllamaProvider",
    "StaticProvider",
]
