"""Deterministic hash-based embedder for demos and tests."""
from __future__ import annotations

import hashlib
import math

from domain.interfaces import Embedder


class HashEmbedder(Embedder):
    """Maps a text to a unit vector derived from its SHA-256 digest.

    Equal texts get equal vectors; there is no semantic similarity.
    """

    def __init__(self, dimension: int = 16) -> None:
        if dimension <= 0:
            raise ValueError("Embedding dimension must be positive")
        self._dimension = dimension
        self._model_id = f"hash-sha256-{dimension}"

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, text: str, *, timeout: float | None = None) -> list[float]:
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        vector = [digest[i % len(digest)] / 255.0 for i in range(self._dimension)]
        norm = math.sqrt(sum(value * value for value in vector)) or 1.0
        return [value / norm for value in vector]


__all__ = ["HashEmbedder"]
