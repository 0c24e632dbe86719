"""Embedder that calls the OpenAI embeddings API."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import requests

from domain.interfaces import Embedder

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OpenAIEmbedderConfig:
    model: str = "text-embedding-ada-002"
    api_key: str | None = None
    url: str = "https://api.openai.com/v1/embeddings"
    timeout: float = 60.0


class OpenAIEmbedder(Embedder):
    """Requests one embedding per call from ``/v1/embeddings``.

    Each call makes its own request, so one instance can serve several
    ingestion workers at once.
    """

    def __init__(self, config: OpenAIEmbedderConfig | None = None) -> None:
        self._config = config or OpenAIEmbedderConfig()

    @property
    def model_id(self) -> str:
        return self._config.model

    def embed(self, text: str, *, timeout: float | None = None) -> list[float]:
        api_key = self._config.api_key or os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise RuntimeError("Missing OpenAI API key.")
        request_timeout = self._config.timeout if timeout is None else min(timeout, self._config.timeout)
        response = requests.post(
            self._config.url,
            headers={"Authorization": f"Bearer {api_key}"},
            json={"input": text, "model": self._config.model},
            timeout=request_timeout,
        )
        if response.status_code != 200:
            logger.error(
                "Embedding request failed: status %d, body: %s",
                response.status_code,
                response.text[:200],
            )
        response.raise_for_status()
        return self._extract_embedding(response.json())

    @staticmethod
    def _extract_embedding(payload: dict) -> list[float]:
        data = payload.get("data") or []
        if not data or not data[0].get("embedding"):
            raise ValueError("No embeddings found in the response.")
        return [float(value) for value in data[0]["embedding"]]


__all__ = ["OpenAIEmbedder", "OpenAIEmbedderConfig"]
