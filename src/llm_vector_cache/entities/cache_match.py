"""Cache match domain entity."""

from dataclasses import dataclass, field
from typing import Any, Literal

MatchType = Literal["exact", "semantic"]


@dataclass(frozen=True)
class CacheMatchEntity:
    """Domain entity for a cache lookup hit.

    Attributes:
        prompt: The stored prompt that matched
        response: The cached response
        similarity: Cosine similarity to the query (1.0 for exact hits)
        match_type: "exact" for hash hits, "semantic" for scan hits
        metadata: Metadata stored with the entry
    """

    prompt: str
    response: str
    similarity: float
    match_type: MatchType
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_exact(self) -> bool:
        return self.match_type == "exact"
