"""Static in-process provider.

Serves embeddings from a fixed text-to-vector mapping (falling back to hash
vectors for unknown text) and answers every completion with canned text.
Used by the test-suite and the offline demo; it makes no network calls.
"""

from typing import Any

from llm_vector_cache.errors import InvalidInputError, ProviderTransportError, ProviderUnavailableError
from llm_vector_cache.similarity import hash_vector


class StaticProvider:
    """Deterministic implementation of the LlmProvider protocol.

    Attributes:
        embed_calls: Texts passed to ``embed``, in call order
        complete_calls: (prompt, options) pairs passed to ``complete``
    """

    def __init__(
        self,
        name: str = "static",
        vectors: dict[str, list[float]] | None = None,
        dimension: int = 3,
        available: bool = True,
        completion: str = "static response",
        fail_embed: bool = False,
        fail_complete: bool = False,
    ) -> None:
        """Initialize the static provider.

        Args:
            name: Provider name used for selection.
            vectors: Fixed embeddings keyed by exact text.
            dimension: Dimension for hash vectors of unmapped text.
            available: Value reported by ``is_available``.
            completion: Text returned by ``complete``.
            fail_embed: Raise ProviderTransportError from ``embed``.
            fail_complete: Raise ProviderTransportError from ``complete``.
        """
        self._name = name
        self._vectors = dict(vectors or {})
        self._dimension = dimension
        self._available = available
        self._completion = completion
        self.fail_embed = fail_embed
        self.fail_complete = fail_complete
        self.embed_calls: list[str] = []
        self.complete_calls: list[tuple[str, dict[str, Any]]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def dimension(self) -> int:
        return self._dimension

    def is_available(self) -> bool:
        return self._available

    def set_vector(self, text: str, vector: list[float]) -> None:
        self._vectors[text] = vector

    async def embed(self, text: str) -> list[float]:
        if text is None or not text.strip():
            raise InvalidInputError("Text cannot be null or empty")
        if not self._available:
            raise ProviderUnavailableError(f"{self._name} provider not available")
        self.embed_calls.append(text)
        if self.fail_embed:
            raise ProviderTransportError(f"{self._name} embedding failed", {"provider": self._name})
        if text in self._vectors:
            return list(self._vectors[text])
        return hash_vector(text, self._dimension)

    async def complete(self, prompt: str, options: dict[str, Any] | None = None) -> str:
        if not self._available:
            raise ProviderUnavailableError(f"{self._name} provider not available")
        self.complete_calls.append((prompt, dict(options or {})))
        if self.fail_complete:
            raise ProviderTransportError(f"{self._name} completion failed", {"provider": self._name})
        return self._completion

    async def close(self) -> None:
        return None
