"""
Tests for the in-memory entry store.
"""

import pytest

from llm_vector_cache.entities import CacheEntryEntity
from llm_vector_cache.protocols import EntryStore
from llm_vector_cache.repositories import MemoryEntryRepository


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repo(clock: FakeClock) -> MemoryEntryRepository:
    return MemoryEntryRepository(clock=clock)


def entry(prompt: str, response: str = "R") -> CacheEntryEntity:
    return CacheEntryEntity.create(prompt, response, [1.0, 0.0])


def test_satisfies_entry_store_protocol(repo):
    assert isinstance(repo, EntryStore)


async def test_put_and_get(repo):
    await repo.put("p:a", entry("a", "first"), ttl=10)
    stored = await repo.get("p:a")
    assert stored is not None
    assert stored.response == "first"


async def test_get_missing_key(repo):
    assert await repo.get("p:missing") is None


async def test_put_overwrites_and_resets_ttl(repo, clock):
    await repo.put("p:a", entry("a", "first"), ttl=10)
    clock.now = 8
    await repo.put("p:a", entry("a", "second"), ttl=10)
    clock.now = 15

    stored = await repo.get("p:a")
    assert stored is not None
    assert stored.response == "second"


async def test_expired_entries_are_absent(repo, clock):
    await repo.put("p:a", entry("a"), ttl=10)
    clock.now = 10

    assert await repo.get("p:a") is None
    assert await repo.scan_keys("p:") == set()
    assert await repo.count("p:") == 0


async def test_scan_keys_filters_by_prefix(repo):
    await repo.put("p:a", entry("a"), ttl=10)
    await repo.put("p:b", entry("b"), ttl=10)
    await repo.put("q:c", entry("c"), ttl=10)

    assert await repo.scan_keys("p:") == {"p:a", "p:b"}
    assert await repo.count("q:") == 1


async def test_delete_and_clear(repo):
    await repo.put("p:a", entry("a"), ttl=10)
    await repo.put("p:b", entry("b"), ttl=10)
    await repo.put("q:c", entry("c"), ttl=10)

    assert await repo.delete("p:a") is True
    assert await repo.delete("p:a") is False
    assert await repo.clear("p:") == 1
    assert await repo.scan_keys("q:") == {"q:c"}


async def test_health_check_and_close(repo):
    await repo.put("p:a", entry("a"), ttl=10)
    assert await repo.health_check() is True
    await repo.close()
    assert await repo.count("p:") == 0
