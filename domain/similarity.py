"""Cosine similarity between embedding vectors."""
from __future__ import annotations

from typing import Sequence

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Return ``dot(a, b) / (|a| * |b|)`` in float64.

    Both vectors must have the same length. A zero vector gives a zero
    denominator and the IEEE result of the division (NaN for ``0 / 0``) is
    returned as is.
    """
    if len(a) != len(b):
        raise ValueError(f"Vector length mismatch: {len(a)} != {len(b)}")
    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    numerator = np.dot(vec_a, vec_b)
    denominator = np.sqrt(np.dot(vec_a, vec_a)) * np.sqrt(np.dot(vec_b, vec_b))
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


__all__ = ["cosine_similarity"]
