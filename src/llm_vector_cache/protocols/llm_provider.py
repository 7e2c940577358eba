"""LLM provider protocol.

Defines the capability set every generative backend offers: embeddings for
the cache and completions for the caller.

Implementations:
- OpenAI hosted API
- Ollama local server
- Static provider (tests and offline demos)
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LlmProvider(Protocol):
    """Protocol for embedding and completion backends.

    Any class with these members satisfies the protocol, no inheritance
    needed.

    Example:
        ```python
        provider: LlmProvider = OpenAIProvider.create()
        provider: LlmProvider = OllamaProvider.create(base_url="http://localhost:11434")
        ```
    """

    @property
    def name(self) -> str:
        """Stable provider identifier used for selection (e.g., "openai")."""
        ...

    @property
    def dimension(self) -> int:
        """Dimension of the vectors this provider produces."""
        ...

    def is_available(self) -> bool:
        """Check whether the provider is configured for use.

        Must be cheap and side-effect free: no network calls. It is
        evaluated once at start-up during provider selection.
        """
        ...

    async def embed(self, text: str) -> list[float]:
        """Generate an embedding vector for text.

        Raises:
            InvalidInputError: If text is empty
            ProviderUnavailableError: If the provider is not configured
            ProviderTransportError: On network or HTTP failure
        """
        ...

    async def complete(self, prompt: str, options: dict[str, Any] | None = None) -> str:
        """Generate a completion for a prompt.

        Args:
            prompt: The input prompt
            options: Open option bag. A "model" key overrides the default
                model; unrecognized keys are ignored.

        Raises:
            ProviderTransportError: On network or HTTP failure
        """
        ...

    async def close(self) -> None:
        """Release HTTP clients held by the provider."""
        ...
