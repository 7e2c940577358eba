"""Exception hierarchy for the vector cache.

Errors fall into two groups:

- Misuse (``InvalidInputError`` and ``InvalidVectorError``) propagates to the
  caller as a hard failure.
- Everything else only affects the caching optimization. The cache service
  converts these into a miss or a dropped write so that the primary
  generation request never fails because the cache did.
"""

from typing import Any


class VectorCacheError(Exception):
    """Base exception for all vector cache errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging or API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvalidInputError(VectorCacheError, ValueError):
    """Caller passed invalid input (empty text, malformed arguments)."""


class InvalidVectorError(InvalidInputError):
    """Vectors are missing, empty, or of different lengths."""


class NoProviderAvailableError(VectorCacheError):
    """No registered provider passed availability filtering at start-up."""

    def __init__(self, message: str = "No LLM provider available", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


class ProviderUnavailableError(VectorCacheError):
    """A specific provider is not configured for use."""


class ProviderTransportError(VectorCacheError):
    """Network failure, timeout, or non-2xx response from a provider."""


class ProviderTimeoutError(ProviderTransportError):
    """A provider call exceeded its time budget."""


class StoreUnavailableError(VectorCacheError):
    """The entry store could not be reached."""


class EntryDecodeError(VectorCacheError):
    """A stored entry could not be deserialized."""
