"""OpenAI hosted API provider.

Uses the REST API directly through httpx:

- ``POST /embeddings`` for vectors
- ``POST /chat/completions`` for completions

The provider counts as available as soon as an API key is configured. No
request is made to check this, so a wrong key only shows up on first use.
"""

from typing import Any

import httpx

from llm_vector_cache.config import settings
from llm_vector_cache.errors import InvalidInputError, ProviderTransportError, ProviderUnavailableError


class OpenAIProvider:
    """OpenAI implementation of the LlmProvider protocol.

    Example:
        ```python
        provider = OpenAIProvider.create(api_key="sk-...")
        vector = await provider.embed("Hello, world!")
        print(len(vector))  # 1536
        ```
    """

    # Known embedding dimensions; anything else is assumed to be 1536
    MODEL_DIMENSIONS = {
        "text-embedding-ada-002": 1536,
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
    }

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        embedding_model: str | None = None,
        chat_model: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the OpenAI provider.

        Args:
            api_key: API key. Defaults to settings.openai_api_key.
            base_url: API base URL. Defaults to settings.openai_base_url.
            embedding_model: Embedding model. Defaults to settings.openai_embedding_model.
            chat_model: Default chat model. Defaults to settings.openai_chat_model.
            timeout: Request timeout in seconds. Defaults to settings.provider_timeout.
            client: Preconfigured httpx client (mainly for tests).
        """
        self._api_key = api_key if api_key is not None else settings.openai_api_key
        self._base_url = (base_url or settings.openai_base_url).rstrip("/")
        self._embedding_model = embedding_model or settings.openai_embedding_model
        self._chat_model = chat_model or settings.openai_chat_model
        self._timeout = timeout or settings.provider_timeout
        self._client = client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        embedding_model: str | None = None,
    ) -> "OpenAIProvider":
        """Factory method to create OpenAIProvider with defaults from settings."""
        return cls(api_key=api_key, base_url=base_url, embedding_model=embedding_model)

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
        return "openai"

    @property
    def dimension(self) -> int:
        return self.MODEL_DIMENSIONS.get(self._embedding_model, 1536)

    @property
    def model_name(self) -> str:
        return self._embedding_model

    def is_available(self) -> bool:
        """Available when an API key is configured."""
        return bool(self._api_key and self._api_key.strip())

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self.client.post(f"{self._base_url}{path}", json=payload, headers=self._headers())
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise ProviderTransportError(f"OpenAI API error on {path}: {e}", {"provider": self.name}) from e
        except ValueError as e:
            raise ProviderTransportError(f"OpenAI returned invalid JSON on {path}: {e}", {"provider": self.name}) from e

    async def embed(self, text: str) -> list[float]:
        """Generate an embedding vector via /embeddings.

        Raises:
            InvalidInputError: If text is empty
            ProviderUnavailableError: If no API key is configured
            ProviderTransportError: If the request fails or the payload is malformed
        """
        if text is None or not text.strip():
            raise InvalidInputError("Text cannot be null or empty")
        if not self.is_available():
            raise ProviderUnavailableError("OpenAI provider not available - missing API key")

        data = await self._post("/embeddings", {"input": text, "model": self._embedding_model})
        try:
            return [float(v) for v in data["data"][0]["embedding"]]
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            raise ProviderTransportError(f"Unexpected embeddings response format: {e}") from e

    async def complete(self, prompt: str, options: dict[str, Any] | None = None) -> str:
        """Generate a chat completion via /chat/completions.

        Args:
            prompt: The user prompt
            options: A "model" key overrides the default chat model

        Raises:
            ProviderUnavailableError: If no API key is configured
            ProviderTransportError: If the request fails or the payload is malformed
        """
        if not self.is_available():
            raise ProviderUnavailableError("OpenAI provider not available - missing API key")

        options = options or {}
        payload = {
            "model": str(options.get("model") or self._chat_model),
            "messages": [{"role": "user", "content": prompt}],
        }
        data = await self._post("/chat/completions", payload)
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            raise ProviderTransportError(f"Unexpected chat completion response format: {e}") from e

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
