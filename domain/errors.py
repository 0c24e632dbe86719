"""Errors raised by the vectorkv store."""
from __future__ import annotations


class VectorStoreError(Exception):
    """Base class for all store errors."""


class NotFoundError(VectorStoreError, KeyError):
    """A collection or document does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class AlreadyExistsError(VectorStoreError):
    """A document id or collection is already present."""


class InvalidNameError(VectorStoreError, ValueError):
    """A collection name or document id cannot be used as a storage key."""


class InvalidMetadataError(VectorStoreError, ValueError):
    """Metadata contains a key or value outside the supported scalar types."""


class EmbeddingFailedError(VectorStoreError):
    """The embedder could not produce a vector for a text."""


class CorruptRecordError(VectorStoreError):
    """Stored bytes could not be decoded into a document."""

    def __init__(self, key: bytes, reason: str) -> None:
        super().__init__(f"Corrupt record at key {key!r}: {reason}")
        self.key = key
        self.reason = reason


class OperationCancelledError(VectorStoreError):
    """The operation was cancelled or ran past its deadline."""


class BatchIngestError(VectorStoreError):
    """One or more documents of a batch failed to ingest.

    Documents that were ingested successfully stay persisted. ``first`` is the
    first failure observed and is also chained as ``__cause__``.
    """

    def __init__(self, failures: list[tuple[str, Exception]], succeeded: list[str]) -> None:
        self.failures = failures
        self.succeeded = succeeded
        self.first = failures[0][1]
        first_id = failures[0][0]
        super().__init__(
            f"{len(failures)} of {len(failures) + len(succeeded)} documents failed; "
            f"first failure for '{first_id}': {self.first}"
        )


__all__ = [
    "VectorStoreError",
    "NotFoundError",
    "AlreadyExistsError",
    "InvalidNameError",
    "InvalidMetadataError",
    "EmbeddingFailedError",
    "CorruptRecordError",
    "OperationCancelledError",
    "BatchIngestError",
]
