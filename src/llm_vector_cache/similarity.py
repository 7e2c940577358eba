"""Vector helpers used for semantic matching."""

import hashlib
import logging
from collections.abc import Sequence

import numpy as np

from llm_vector_cache.errors import InvalidVectorError

logger = logging.getLogger(__name__)


def cosine_similarity(vector_a: Sequence[float] | None, vector_b: Sequence[float] | None) -> float:
    """Calculate cosine similarity between two vectors.

    Results interpretation:
        1.0: identical direction
        0.0: orthogonal, or either vector is all zeros
        -1.0: opposite direction

    Accumulation is done in float64 whatever the input element type.

    Args:
        vector_a: First vector
        vector_b: Second vector

    Returns:
        Similarity score in [-1.0, 1.0]

    Raises:
        InvalidVectorError: If either vector is None or empty, lengths differ,
            or any element is NaN or infinite
    """
    if vector_a is None or vector_b is None:
        raise InvalidVectorError("Vectors cannot be None")

    a = np.asarray(vector_a, dtype=np.float64).ravel()
    b = np.asarray(vector_b, dtype=np.float64).ravel()

    if a.size != b.size:
        raise InvalidVectorError(
            "Vectors must have the same length",
            details={"length_a": int(a.size), "length_b": int(b.size)},
        )
    if a.size == 0:
        raise InvalidVectorError("Vectors cannot be empty")
    # NaN would otherwise survive the clamp below as 1.0
    if not (np.isfinite(a).all() and np.isfinite(b).all()):
        raise InvalidVectorError("Vectors must contain only finite values")

    norm_a = float(np.sqrt(np.dot(a, a)))
    norm_b = float(np.sqrt(np.dot(b, b)))

    if norm_a == 0.0 or norm_b == 0.0:
        logger.warning("Encountered zero vector in cosine similarity calculation")
        return 0.0  # Orthogonal to everything

    similarity = float(np.dot(a, b)) / (norm_a * norm_b)
    return max(-1.0, min(1.0, similarity))


def is_finite_vector(vector: Sequence[float] | None) -> bool:
    """True if the vector is non-empty and holds only finite numbers."""
    if not vector:
        return False
    return bool(np.isfinite(np.asarray(vector, dtype=np.float64)).all())


def hash_vector(text: str, dimension: int) -> list[float]:
    """Derive a deterministic pseudo-embedding from the text's SHA-256.

    Identical text always yields the identical vector, in any process. The
    vector carries no semantic information: only exact repeats score 1.0.

    Args:
        text: Source text
        dimension: Length of the returned vector

    Returns:
        Vector of small floats in [-0.1, 0.1)
    """
    seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")
    rng = np.random.default_rng(seed)
    return (rng.random(dimension) * 0.2 - 0.1).tolist()
