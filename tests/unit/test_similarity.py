"""
Tests for cosine similarity and hash-derived vectors.
"""

import math

import numpy as np
import pytest

from llm_vector_cache.errors import InvalidInputError, InvalidVectorError
from llm_vector_cache.similarity import cosine_similarity, hash_vector, is_finite_vector


@pytest.mark.parametrize(
    "vector",
    [[1.0, 2.0, 3.0], [0.5], [-4.0, 0.25, 9.0, 1e-3], [1e6, -1e6]],
)
def test_identical_vectors_score_one(vector):
    """A vector is maximally similar to itself."""
    assert cosine_similarity(vector, vector) == pytest.approx(1.0)


def test_orthogonal_vectors_score_zero():
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)


def test_opposite_vectors_score_minus_one():
    assert cosine_similarity([1.0, 2.0, 3.0], [-1.0, -2.0, -3.0]) == pytest.approx(-1.0)


def test_known_angle():
    """45 degrees apart gives cos(45)."""
    assert cosine_similarity([1.0, 0.0], [1.0, 1.0]) == pytest.approx(math.sqrt(2) / 2)


def test_zero_vector_returns_exactly_zero():
    """Zero magnitude is defined as orthogonal to everything, never NaN."""
    result = cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0])
    assert result == 0.0
    assert not math.isnan(result)
    assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0
    assert cosine_similarity([0.0], [0.0]) == 0.0


def test_result_never_exceeds_bounds():
    vector = [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7]
    assert -1.0 <= cosine_similarity(vector, vector) <= 1.0


def test_float32_input_accumulates_in_double_precision():
    a = np.array([1e-20, 1.0], dtype=np.float32)
    b = np.array([1e-20, 1.0], dtype=np.float32)
    assert cosine_similarity(a, b) == pytest.approx(1.0)


def test_mismatched_lengths_raise():
    with pytest.raises(InvalidVectorError, match="same length"):
        cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])


@pytest.mark.parametrize("a,b", [(None, [1.0]), ([1.0], None), (None, None)])
def test_none_vectors_raise(a, b):
    with pytest.raises(InvalidVectorError):
        cosine_similarity(a, b)


def test_empty_vectors_raise():
    with pytest.raises(InvalidVectorError, match="empty"):
        cosine_similarity([], [])


@pytest.mark.parametrize(
    "a,b",
    [
        ([math.nan, 1.0], [0.0, 1.0]),
        ([0.0, 1.0], [1.0, math.nan]),
        ([math.inf, 1.0], [1.0, 1.0]),
        ([1.0, 1.0], [-math.inf, 0.0]),
    ],
)
def test_non_finite_vectors_raise(a, b):
    """NaN must never clamp to a perfect score."""
    with pytest.raises(InvalidVectorError, match="finite"):
        cosine_similarity(a, b)


def test_is_finite_vector():
    assert is_finite_vector([0.0, -1.5, 2.0]) is True
    assert is_finite_vector([1.0, math.nan]) is False
    assert is_finite_vector([math.inf]) is False
    assert is_finite_vector([]) is False
    assert is_finite_vector(None) is False


def test_invalid_vector_error_is_a_value_error():
    """Misuse surfaces as a ValueError for callers that only know builtins."""
    with pytest.raises(ValueError):
        cosine_similarity([1.0], [1.0, 2.0])
    assert issubclass(InvalidVectorError, InvalidInputError)


def test_hash_vector_is_deterministic():
    assert hash_vector("hello", 16) == hash_vector("hello", 16)


def test_hash_vector_has_requested_dimension_and_range():
    vector = hash_vector("some prompt", 4096)
    assert len(vector) == 4096
    assert all(-0.1 <= v < 0.1 for v in vector)


def test_hash_vector_differs_between_texts():
    assert hash_vector("first", 32) != hash_vector("second", 32)
    assert cosine_similarity(hash_vector("first", 256), hash_vector("second", 256)) < 0.5
