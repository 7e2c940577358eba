"""
Tests for the cache entry entity and prompt ids.
"""

import json
from datetime import datetime

import pytest

from llm_vector_cache.entities import CacheEntryEntity, CacheMatchEntity, CacheStatsEntity, prompt_id
from llm_vector_cache.errors import EntryDecodeError, InvalidVectorError


def test_prompt_id_is_md5_hex():
    # md5("hello") is a well-known digest, stable across processes
    assert prompt_id("hello") == "5d41402abc4b2a76b9719d911017c592"


def test_prompt_id_is_deterministic_and_fixed_length():
    assert prompt_id("What is Redis?") == prompt_id("What is Redis?")
    assert len(prompt_id("What is Redis?")) == 32
    assert len(prompt_id("")) == 32


def test_distinct_prompts_have_distinct_ids():
    prompts = [f"prompt number {i}" for i in range(500)] + ["What is Redis?", "what is redis?"]
    assert len({prompt_id(p) for p in prompts}) == len(prompts)


def test_create_derives_id_and_copies_metadata():
    metadata = {"model": "gpt-3.5-turbo"}
    entry = CacheEntryEntity.create("A", "R1", [1, 0, 0], metadata)

    assert entry.id == prompt_id("A")
    assert entry.vector == [1.0, 0.0, 0.0]
    assert entry.metadata == metadata
    assert entry.metadata is not metadata
    assert isinstance(entry.timestamp, datetime)
    assert entry.timestamp.tzinfo is not None


def test_create_defaults_metadata_to_empty_dict():
    entry = CacheEntryEntity.create("A", "R1", [1.0])
    assert entry.metadata == {}


def test_create_rejects_empty_vector():
    with pytest.raises(InvalidVectorError):
        CacheEntryEntity.create("A", "R1", [])


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_create_rejects_non_finite_vector(bad):
    with pytest.raises(InvalidVectorError):
        CacheEntryEntity.create("A", "R1", [1.0, bad])


def test_from_json_keeps_dict_metadata():
    entry = CacheEntryEntity.create("A", "R1", [1.0], {"model": "m1"})
    assert CacheEntryEntity.from_json(entry.to_json()).metadata == {"model": "m1"}


def test_entries_are_immutable():
    entry = CacheEntryEntity.create("A", "R1", [1.0])
    with pytest.raises(AttributeError):
        entry.response = "changed"  # type: ignore[misc]


def test_json_serialization_preserves_fields():
    entry = CacheEntryEntity.create("Apa itu cache?", "Jawaban", [0.25, -0.5], {"tokens": 12})

    restored = CacheEntryEntity.from_json(entry.to_json())

    assert restored == entry


def test_from_json_accepts_bytes():
    entry = CacheEntryEntity.create("A", "R1", [1.0, 2.0])
    assert CacheEntryEntity.from_json(entry.to_json().encode("utf-8")) == entry


def test_serialized_layout():
    entry = CacheEntryEntity.create("A", "R1", [1.0])
    raw = json.loads(entry.to_json())
    assert set(raw) == {"id", "prompt", "response", "vector", "timestamp", "metadata"}


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        "{}",
        '{"id": "x", "prompt": "p", "response": "r", "vector": [], "timestamp": "yesterday"}',
        b"\xff\xfe",
        "[1, 2]",
        '{"id": "x", "prompt": "p", "response": "r", "vector": [1.0], '
        '"timestamp": "2024-01-01T00:00:00+00:00", "metadata": ["not", "a", "dict"]}',
        '{"id": "x", "prompt": "p", "response": "r", "vector": [1.0], '
        '"timestamp": "2024-01-01T00:00:00+00:00", "metadata": "model=gpt"}',
    ],
)
def test_from_json_rejects_malformed_payloads(payload):
    with pytest.raises(EntryDecodeError):
        CacheEntryEntity.from_json(payload)


def test_match_entity_reports_exactness():
    exact = CacheMatchEntity(prompt="A", response="R1", similarity=1.0, match_type="exact")
    semantic = CacheMatchEntity(prompt="A", response="R1", similarity=0.97, match_type="semantic")
    assert exact.is_exact
    assert not semantic.is_exact


def test_stats_entity_derived_values():
    stats = CacheStatsEntity(total_entries=10, cache_hits=3, cache_misses=1)
    assert stats.total_requests == 4
    assert stats.hit_rate_percentage == pytest.approx(75.0)
    assert stats.to_dict()["hit_rate_percentage"] == pytest.approx(75.0)


def test_stats_entity_empty_hit_rate_is_zero():
    assert CacheStatsEntity().hit_rate_percentage == 0.0
