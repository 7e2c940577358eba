"""Protocol interfaces for swappable implementations.

Protocols use structural typing, so any class with matching methods can be
plugged in:

- ``EntryStore``: Redis, in-memory, or any other TTL-capable key-value store
- ``LlmProvider``: OpenAI, Ollama, or a static test double

Usage:
    ```python
    from llm_vector_cache.protocols import EntryStore, LlmProvider

    store: EntryStore = RedisEntryRepository.create()
    store: EntryStore = MemoryEntryRepository()
    ```
"""

from .entry_store import EntryStore
from .llm_provider import LlmProvider

__all__ = [
    "EntryStore",
    "LlmProvider",
]
