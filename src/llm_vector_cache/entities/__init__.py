"""Domain entities for internal representation.

These are frozen dataclasses used by services and repositories. Serialization
of cache entries lives on the entity itself so that every store writes the
same record layout.
"""

from .cache_entry import CacheEntryEntity, prompt_id
from .cache_match import CacheMatchEntity
from .cache_stats import CacheStatsEntity

__all__ = ["CacheEntryEntity", "CacheMatchEntity", "CacheStatsEntity", "prompt_id"]
