"""Embedder backed by a local sentence-transformers model."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from domain.interfaces import Embedder


@dataclass(slots=True)
class SentenceTransformersConfig:
    model_name: str = "sentence-transformers/all-MiniLM-L6-v2"
    device: str = "cpu"
    normalize_embeddings: bool = True


logger = logging.getLogger(__name__)


class SentenceTransformersEmbedder(Embedder):
    """Encodes texts with a sentence-transformers model loaded once."""

    def __init__(self, config: SentenceTransformersConfig) -> None:
        # Imported lazily: the package is an optional extra.
        from sentence_transformers import SentenceTransformer

        self._config = config
        logger.info("Loading sentence-transformers model: %s", config.model_name)
        self._model = SentenceTransformer(config.model_name, device=config.device)

    @property
    def model_id(self) -> str:
        return self._config.model_name

    def embed(self, text: str, *, timeout: float | None = None) -> list[float]:
        logger.debug("Encoding text with model %s", self._config.model_name)
        embeddings = self._model.encode(
            [text],
            batch_size=1,
            normalize_embeddings=self._config.normalize_embeddings,
            show_progress_bar=False,
        )
        return embeddings[0].tolist()


__all__ = ["SentenceTransformersEmbedder", "SentenceTransformersConfig"]
