"""Ollama local server provider.

Uses Ollama's local HTTP API:

- ``POST /api/embeddings`` for vectors
- ``POST /api/generate`` (non-streaming) for completions

Requirements:
    - Ollama installed: https://ollama.com
    - Model pulled: `ollama pull qwen2.5-coder:3b`
    - Ollama running: `ollama serve`

Many chat models served by Ollama have no embedding support. When the
embedding endpoint fails or returns no vector, the provider falls back to a
deterministic hash-derived vector of the configured dimension. The fallback
never calls out to any other backend.
"""

import logging
from typing import Any

import httpx

from llm_vector_cache.config import settings
from llm_vector_cache.errors import InvalidInputError, ProviderTransportError, ProviderUnavailableError
from llm_vector_cache.similarity import hash_vector

logger = logging.getLogger(__name__)


class OllamaProvider:
    """Ollama implementation of the LlmProvider protocol.

    Example:
        ```python
        provider = OllamaProvider.create(
            model_name="qwen2.5-coder:3b",
            base_url="http://localhost:11434",
        )
        vector = await provider.embed("Hello, world!")
        answer = await provider.complete("Why is the sky blue?")
        ```
    """

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        dimension: int | None = None,
        timeout: float | None = None,
        hash_fallback: bool | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Ollama provider.

        Args:
            model_name: Name of the Ollama model. Defaults to settings.ollama_model.
            base_url: Ollama API base URL. Defaults to settings.ollama_base_url.
            dimension: Vector dimension of the model (and of fallback vectors).
            timeout: Request timeout in seconds.
            hash_fallback: Use hash-derived vectors when embedding fails.
            client: Preconfigured httpx client (mainly for tests).
        """
        self._model_name = model_name or settings.ollama_model
        self._base_url = (base_url if base_url is not None else settings.ollama_base_url) or ""
        self._base_url = self._base_url.rstrip("/")
        self._dimension = dimension or settings.ollama_dimension
        self._timeout = timeout or settings.provider_timeout
        self._hash_fallback = settings.ollama_hash_fallback if hash_fallback is None else hash_fallback
        self._client = client

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
    ) -> "OllamaProvider":
        """Factory method to create OllamaProvider with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            base_url: Ollama API URL. If None, uses settings.

        Returns:
            Configured OllamaProvider
        """
        return cls(model_name=model_name, base_url=base_url)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def name(self) -> str:
        return "ollama"

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return self._model_name

    def is_available(self) -> bool:
        """Available when both a base URL and a model are configured."""
        return bool(self._base_url.strip() and self._model_name.strip())

    async def embed(self, text: str) -> list[float]:
        """Generate an embedding vector for text.

        Raises:
            InvalidInputError: If text is empty
            ProviderUnavailableError: If no base URL or model is configured
            ProviderTransportError: If the request fails and fallback is disabled
        """
        if text is None or not text.strip():
            raise InvalidInputError("Text cannot be null or empty")
        if not self.is_available():
            raise ProviderUnavailableError("Ollama provider not available - check configuration")

        try:
            return await self._embed_remote(text)
        except ProviderTransportError as e:
            if not self._hash_fallback:
                raise
            logger.warning("Ollama embedding endpoint failed, using hash fallback vector: %s", e)
            return hash_vector(text, self._dimension)

    async def _embed_remote(self, text: str) -> list[float]:
        url = f"{self._base_url}/api/embeddings"
        try:
            response = await self.client.post(url, json={"model": self._model_name, "prompt": text})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            error_msg = f"Ollama API error: {e}"
            if "connection refused" in str(e).lower():
                error_msg += " (is Ollama running? Try: ollama serve)"
            raise ProviderTransportError(error_msg, {"provider": self.name}) from e
        except ValueError as e:
            raise ProviderTransportError(f"Ollama returned invalid JSON: {e}", {"provider": self.name}) from e

        # /api/embeddings returns {"embedding": [...]}, /api/embed returns {"embeddings": [[...]]}
        try:
            vector = data.get("embedding")
            if not vector and data.get("embeddings"):
                vector = data["embeddings"][0]
            values = [float(v) for v in vector or []]
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            raise ProviderTransportError(
                f"Unexpected embeddings response format: {e}", {"provider": self.name}
            ) from e
        if not values:
            raise ProviderTransportError(
                f"Ollama returned no embedding for model {self._model_name}",
                {"provider": self.name},
            )
        return values

    async def complete(self, prompt: str, options: dict[str, Any] | None = None) -> str:
        """Generate a completion via /api/generate.

        Args:
            prompt: The input prompt
            options: A "model" key overrides the configured model

        Raises:
            ProviderUnavailableError: If no base URL or model is configured
            ProviderTransportError: If the request fails or the payload is malformed
        """
        if not self.is_available():
            raise ProviderUnavailableError("Ollama provider not available - check configuration")

        options = options or {}
        payload = {
            "model": str(options.get("model") or self._model_name),
            "prompt": prompt,
            "stream": False,
        }
        try:
            response = await self.client.post(f"{self._base_url}/api/generate", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise ProviderTransportError(f"Ollama generate error: {e}", {"provider": self.name}) from e
        except ValueError as e:
            raise ProviderTransportError(f"Ollama returned invalid JSON: {e}", {"provider": self.name}) from e

        if not isinstance(data, dict) or "response" not in data:
            raise ProviderTransportError(f"Unexpected generate response format: {data}")
        return data["response"]

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
