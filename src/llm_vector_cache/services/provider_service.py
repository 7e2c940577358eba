"""Provider selection and the active-provider facade.

One provider is chosen at construction time and kept for the life of the
process:

1. Keep only providers reporting ``is_available()``.
2. Prefer the one whose name matches the configured provider.
3. Otherwise take the first available one in registration order.
4. If none is available there is no active provider, and ``embed`` and
   ``complete`` raise ``NoProviderAvailableError``.

Selection is a snapshot. A provider that becomes available later is not
picked up without a restart.
"""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Any, TypeVar

from llm_vector_cache.config import settings
from llm_vector_cache.errors import NoProviderAvailableError, ProviderTimeoutError
from llm_vector_cache.protocols import LlmProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")


def select_provider(providers: Sequence[LlmProvider], preferred_name: str) -> LlmProvider | None:
    """Pick the active provider from the registered ones.

    Args:
        providers: Registered providers in registration order
        preferred_name: Configured provider name

    Returns:
        The selected provider, or None if none is available
    """
    available = [p for p in providers if p.is_available()]

    for provider in available:
        if provider.name == preferred_name:
            return provider

    if available:
        fallback = available[0]
        logger.warning(
            "Configured provider '%s' not available, using fallback: %s",
            preferred_name,
            fallback.name,
        )
        return fallback

    return None


class ProviderService:
    """Facade that routes embedding and completion calls to the active provider.

    Every call is bounded by ``timeout`` seconds so a hanging backend cannot
    stall callers indefinitely.

    Example:
        ```python
        service = ProviderService(
            providers=[OpenAIProvider.create(), OllamaProvider.create()],
            active_provider_name="ollama",
        )
        vector = await service.embed("Hello")
        ```
    """

    def __init__(
        self,
        providers: Sequence[LlmProvider],
        active_provider_name: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the service and select the active provider.

        Args:
            providers: Registered providers, in registration order.
            active_provider_name: Preferred provider. Defaults to settings.
            timeout: Per-call timeout in seconds. Defaults to settings.
        """
        self._providers = list(providers)
        self._preferred_name = active_provider_name or settings.llm_provider_active
        self._timeout = timeout or settings.provider_timeout
        self._active = select_provider(self._providers, self._preferred_name)

        logger.info("Registered LLM providers: %s", [p.name for p in self._providers])
        logger.info("Active LLM provider: %s", self._active.name if self._active else "none")

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise ProviderTimeoutError(
                f"{operation} timed out after {self._timeout}s",
                {"provider": self._active.name if self._active else None},
            ) from e

    def _require_active(self) -> LlmProvider:
        if self._active is None:
            raise NoProviderAvailableError(
                details={"registered": [p.name for p in self._providers]},
            )
        return self._active

    async def embed(self, text: str) -> list[float]:
        """Generate an embedding with the active provider.

        Raises:
            NoProviderAvailableError: If no provider was selected
            ProviderTimeoutError: If the call exceeds the timeout
        """
        provider = self._require_active()
        return await self._call("embed", provider.embed(text))

    async def complete(self, prompt: str, options: dict[str, Any] | None = None) -> str:
        """Generate a completion with the active provider.

        Raises:
            NoProviderAvailableError: If no provider was selected
            ProviderTimeoutError: If the call exceeds the timeout
        """
        provider = self._require_active()
        return await self._call("complete", provider.complete(prompt, options))

    @property
    def active_provider(self) -> LlmProvider | None:
        """The selected provider, or None if none was available."""
        return self._active

    @property
    def registered_providers(self) -> list[LlmProvider]:
        return list(self._providers)

    @property
    def available_providers(self) -> list[LlmProvider]:
        return [p for p in self._providers if p.is_available()]

    @property
    def timeout(self) -> float:
        return self._timeout

    async def close(self) -> None:
        """Close every registered provider."""
        for provider in self._providers:
            await provider.close()
