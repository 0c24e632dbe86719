"""Document repository on top of an ordered key-value store."""
from __future__ import annotations

import logging
from contextlib import closing
from typing import Iterator

from domain.entities import Document
from domain.errors import AlreadyExistsError, CorruptRecordError, NotFoundError
from domain.interfaces import DocumentRepository, KeyValueStore
from infrastructure.repositories.keyspace import collection_bounds, document_key, scan_bounds
from infrastructure.repositories.record_codec import decode_document, encode_document

logger = logging.getLogger(__name__)


class KvDocumentRepository(DocumentRepository):
    """Stores each document under ``<collection>:<id>``.

    ``put`` relies on :meth:`KeyValueStore.put_if_absent`, so two concurrent
    writers of the same id cannot both succeed: one stores its record and the
    other gets ``AlreadyExistsError``.
    """

    def __init__(self, kv_store: KeyValueStore) -> None:
        self._kv_store = kv_store

    @property
    def kv_store(self) -> KeyValueStore:
        return self._kv_store

    def get(self, collection: str, document_id: str) -> Document:
        key = document_key(collection, document_id)
        raw = self._kv_store.get(key)
        if raw is None:
            raise NotFoundError(f"Document '{document_id}' not found in collection '{collection}'")
        return decode_document(key, raw)

    def exists(self, collection: str, document_id: str) -> bool:
        return self._kv_store.get(document_key(collection, document_id)) is not None

    def put(self, collection: str, document: Document) -> None:
        key = document_key(collection, document.id)
        if not self._kv_store.put_if_absent(key, encode_document(document)):
            raise AlreadyExistsError(
                f"Document '{document.id}' already exists in collection '{collection}'"
            )
        logger.debug("Stored document %s in collection %s", document.id, collection)

    def scan_all(self, collection: str) -> Iterator[Document]:
        lower, upper = scan_bounds(collection)
        return self._decode_all(collection, lower, upper)

    def _decode_all(self, collection: str, lower: bytes, upper: bytes) -> Iterator[Document]:
        count = 0
        with closing(self._kv_store.scan(lower, upper)) as rows:
            for key, raw in rows:
                try:
                    document = decode_document(key, raw)
                except CorruptRecordError:
                    logger.warning("Aborting scan of collection %s on corrupt record %r", collection, key)
                    raise
                count += 1
                yield document
        logger.debug("Scanned %d documents in collection %s", count, collection)

    def has_any(self, collection: str) -> bool:
        lower, upper = collection_bounds(collection)
        with closing(self._kv_store.scan(lower, upper)) as rows:
            return next(rows, None) is not None


__all__ = ["KvDocumentRepository"]
