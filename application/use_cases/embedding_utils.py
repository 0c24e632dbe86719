"""Helpers for calling the embedder from use cases."""
from __future__ import annotations

import numpy as np

from domain.cancellation import CancellationToken, check, remaining
from domain.errors import EmbeddingFailedError, OperationCancelledError
from domain.interfaces import Embedder


def embed_text(
    embedder: Embedder,
    text: str,
    *,
    cancellation: CancellationToken | None = None,
) -> list[float]:
    """Embed ``text`` and check the result.

    Embedder errors are re-raised as ``EmbeddingFailedError``. The remaining
    time of ``cancellation`` is passed to the embedder as its timeout.
    """
    check(cancellation)
    try:
        vector = embedder.embed(text, timeout=remaining(cancellation))
    except OperationCancelledError:
        raise
    except Exception as exc:
        check(cancellation)
        raise EmbeddingFailedError(f"Embedder {embedder.model_id} failed: {exc}") from exc
    check(cancellation)

    try:
        raw = np.asarray(vector)
    except (TypeError, ValueError) as exc:
        raise EmbeddingFailedError(f"Embedder {embedder.model_id} returned non-numeric values") from exc
    # Integer and floating dtypes only; bools, strings and objects are rejected.
    if raw.ndim != 1 or raw.dtype.kind not in "iuf":
        raise EmbeddingFailedError(f"Embedder {embedder.model_id} returned non-numeric values")
    if not raw.size:
        raise EmbeddingFailedError(f"Embedder {embedder.model_id} returned an empty vector")
    values = raw.astype(np.float64)
    if not np.isfinite(values).all():
        raise EmbeddingFailedError(f"Embedder {embedder.model_id} returned non-finite values")
    return values.tolist()


__all__ = ["embed_text"]
