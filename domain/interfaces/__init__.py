"""Abstract interfaces for the vectorkv store."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from domain.entities import Document


class Embedder(ABC):
    """Turns text (documents or queries) into vector embeddings."""

    @property
    @abstractmethod
    def model_id(self) -> str:
        """Return the stable identifier for this embedding model."""

    @abstractmethod
    def embed(self, text: str, *, timeout: float | None = None) -> list[float]:
        """Embed a single text into a dense vector.

        ``timeout`` bounds the call in seconds when the implementation performs
        blocking I/O. Any failure is raised to the caller.
        """


class KeyValueStore(ABC):
    """Ordered byte key-value store.

    Implementations must be safe to share between threads. A successful
    ``put`` or ``put_if_absent`` is visible to every read issued after it
    returns.
    """

    @abstractmethod
    def get(self, key: bytes) -> bytes | None:
        """Return the value stored under ``key`` or ``None``."""

    @abstractmethod
    def put(self, key: bytes, value: bytes) -> None:
        """Durably store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def put_if_absent(self, key: bytes, value: bytes) -> bool:
        """Atomically store ``value`` only if ``key`` is absent.

        Return True when the value was written.
        """

    @abstractmethod
    def scan(self, lower: bytes, upper: bytes) -> Iterator[tuple[bytes, bytes]]:
        """Yield ``(key, value)`` pairs with ``lower <= key < upper`` in byte order."""

    def close(self) -> None:
        """Release resources held by the store."""


class DocumentRepository(ABC):
    """Persists documents keyed by collection and document id."""

    @abstractmethod
    def get(self, collection: str, document_id: str) -> Document:
        """Return a stored document or raise ``NotFoundError``."""

    @abstractmethod
    def exists(self, collection: str, document_id: str) -> bool:
        """Return True when a document with this id is stored."""

    @abstractmethod
    def put(self, collection: str, document: Document) -> None:
        """Store a new document or raise ``AlreadyExistsError``."""

    @abstractmethod
    def scan_all(self, collection: str) -> Iterator[Document]:
        """Lazily yield every document of a collection in key order."""

    @abstractmethod
    def has_any(self, collection: str) -> bool:
        """Return True when at least one key carries the collection prefix."""


__all__ = [
    "Embedder",
    "KeyValueStore",
    "DocumentRepository",
]
