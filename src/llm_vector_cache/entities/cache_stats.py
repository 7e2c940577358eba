"""Cache statistics domain entity."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class CacheStatsEntity:
    """Point-in-time cache statistics.

    Attributes:
        total_entries: Live entries in the store (0 when the store is unreachable)
        cache_hits: Lookups answered from the cache
        cache_misses: Lookups that fell through to the backend
    """

    total_entries: int = 0
    cache_hits: int = 0
    cache_misses: int = 0

    @property
    def total_requests(self) -> int:
        return self.cache_hits + self.cache_misses

    @property
    def hit_rate_percentage(self) -> float:
        """Hit rate as a percentage, 0.0 when nothing was recorded yet."""
        if self.total_requests == 0:
            return 0.0
        return self.cache_hits / self.total_requests * 100.0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["total_requests"] = self.total_requests
        data["hit_rate_percentage"] = self.hit_rate_percentage
        return data
