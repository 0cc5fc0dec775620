"""Cosine similarity between face embeddings."""

from collections.abc import Sequence

import numpy as np


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """Return the cosine similarity of two embeddings, in [-1, 1].

    Vectors of different length, empty vectors, zero vectors and vectors
    holding NaN or inf cannot be compared; they score ``0.0``, which callers
    treat as "no match".
    """
    vec_a = np.asarray(a, dtype=np.float64).ravel()
    vec_b = np.asarray(b, dtype=np.float64).ravel()
    if vec_a.size == 0 or vec_a.size != vec_b.size:
        return 0.0
    if not (np.isfinite(vec_a).all() and np.isfinite(vec_b).all()):
        return 0.0

    unit_a = _unit(vec_a)
    unit_b = _unit(vec_b)
    if unit_a is None or unit_b is None:
        return 0.0

    score = float(np.dot(unit_a, unit_b))
    if not np.isfinite(score):
        return 0.0
    return max(-1.0, min(1.0, score))


def _unit(vec: np.ndarray) -> np.ndarray | None:
    # Scale by the largest component first so huge values cannot overflow the norm
    peak = float(np.max(np.abs(vec)))
    if peak == 0.0:
        return None
    scaled = vec / peak
    return scaled / np.linalg.norm(scaled)
