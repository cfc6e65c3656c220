"""
Vector similarity for embedding-based matching.

Converts the cosine similarity of two embeddings into the 0-100 semantic
score used by the matching engine.
"""

from typing import Sequence

import numpy as np

from talentmatch.core.exceptions import DimensionMismatch
from talentmatch.utils.constants import SEMANTIC_CONFIDENCE_THRESHOLDS
from talentmatch.utils.scoring import clamp_score


def as_vector(values: Sequence[float] | np.ndarray) -> np.ndarray:
    """Coerce a list or array of floats to a 1-D float64 array."""
    return np.asarray(values, dtype=np.float64)


def cosine_similarity(
    a: Sequence[float] | np.ndarray,
    b: Sequence[float] | np.ndarray,
) -> float:
    """
    Calculate cosine similarity between two embeddings.

    Args:
        a: First embedding vector.
        b: Second embedding vector.

    Returns:
        Similarity in [-1, 1]. A zero vector has no direction and yields 0.0.

    Raises:
        DimensionMismatch: If the vectors are not 1-D or differ in length.
    """
    vec_a = as_vector(a)
    vec_b = as_vector(b)

    if vec_a.ndim != 1 or vec_b.ndim != 1 or vec_a.shape != vec_b.shape:
        raise DimensionMismatch(vec_a.shape, vec_b.shape)

    norm_a = np.linalg.norm(vec_a)
    norm_b = np.linalg.norm(vec_b)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    sim = np.dot(vec_a, vec_b) / (norm_a * norm_b)
    # Clip to valid range (numerical precision issues)
    return float(np.clip(sim, -1.0, 1.0))


def to_percentage(similarity: float) -> int:
    """Map a cosine similarity in [-1, 1] onto a 0-100 score."""
    return clamp_score((similarity + 1) * 50)


def semantic_score(
    a: Sequence[float] | np.ndarray,
    b: Sequence[float] | np.ndarray,
) -> int:
    """Cosine similarity of two embeddings as a 0-100 score."""
    return to_percentage(cosine_similarity(a, b))


def semantic_confidence(score: int) -> str:
    """Label a semantic score as high, medium, or low confidence."""
    if score >= SEMANTIC_CONFIDENCE_THRESHOLDS["high"]:
        return "high"
    elif score >= SEMANTIC_CONFIDENCE_THRESHOLDS["medium"]:
        return "medium"
    return "low"
