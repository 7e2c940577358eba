"""Cache entry domain entity."""

import hashlib
import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from llm_vector_cache.errors import EntryDecodeError, InvalidVectorError


def prompt_id(prompt: str) -> str:
    """Return the content hash used as the entry id.

    MD5 hex digest of the UTF-8 prompt: stable across processes, 32 chars.
    """
    return hashlib.md5(prompt.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached prompt-response pair.

    Entries are immutable. Updating a prompt's response means writing a new
    entry under the same id, which overwrites the old one.

    Attributes:
        id: Content hash of the prompt (see ``prompt_id``)
        prompt: The original user prompt
        response: The cached LLM response
        vector: Embedding of the prompt from the provider active at write time
        timestamp: When this entry was created (informational, TTL is store-side)
        metadata: Optional additional data (e.g., model used)
    """

    id: str
    prompt: str
    response: str
    vector: list[float]
    timestamp: datetime
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        prompt: str,
        response: str,
        vector: list[float],
        metadata: dict[str, Any] | None = None,
    ) -> "CacheEntryEntity":
        """Build a new entry, deriving its id from the prompt.

        Raises:
            InvalidVectorError: If the vector is empty or not all finite
        """
        if not vector:
            raise InvalidVectorError("Cache entry vector cannot be empty")
        values = [float(v) for v in vector]
        if not all(math.isfinite(v) for v in values):
            raise InvalidVectorError("Cache entry vector must contain only finite values")
        return cls(
            id=prompt_id(prompt),
            prompt=prompt,
            response=response,
            vector=values,
            timestamp=datetime.now(timezone.utc),
            metadata=dict(metadata or {}),
        )

    def to_json(self) -> str:
        """Serialize the entry for storage."""
        return json.dumps(
            {
                "id": self.id,
                "prompt": self.prompt,
                "response": self.response,
                "vector": self.vector,
                "timestamp": self.timestamp.isoformat(),
                "metadata": self.metadata,
            },
            ensure_ascii=False,
            separators=(",", ":"),
            default=str,
        )

    @classmethod
    def from_json(cls, data: str | bytes) -> "CacheEntryEntity":
        """Deserialize a stored entry.

        Raises:
            EntryDecodeError: If the payload is not a valid entry
        """
        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            raw = json.loads(data)
            metadata = raw.get("metadata") or {}
            if not isinstance(metadata, dict):
                raise TypeError(f"metadata must be an object, got {type(metadata).__name__}")
            return cls(
                id=raw["id"],
                prompt=raw["prompt"],
                response=raw["response"],
                vector=[float(v) for v in raw.get("vector") or []],
                timestamp=datetime.fromisoformat(raw["timestamp"]),
                metadata=metadata,
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise EntryDecodeError(f"Invalid cache entry payload: {e}") from e
