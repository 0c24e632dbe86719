"""Use case for ingesting documents into a collection."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Mapping, Sequence

from application.use_cases.embedding_utils import embed_text
from domain.cancellation import CancellationToken, check
from domain.entities import Document, MetadataValue, NewDocument
from domain.errors import AlreadyExistsError, BatchIngestError
from domain.interfaces import DocumentRepository, Embedder
from domain.metadata import validate_metadata
from infrastructure.repositories.keyspace import document_key

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


def add_document(
    collection: str,
    document_id: str,
    text: str,
    metadata: Mapping[str, MetadataValue] | None = None,
    *,
    embedder: Embedder,
    document_store: DocumentRepository,
    cancellation: CancellationToken | None = None,
) -> Document:
    """Embed ``text`` and store it as a new document.

    Nothing is written unless the embedding succeeds. Raises
    ``AlreadyExistsError`` for a duplicate id, ``EmbeddingFailedError`` when the
    embedder fails and ``OperationCancelledError`` when ``cancellation`` trips.
    """
    document_key(collection, document_id)  # rejects unusable names before any I/O
    validated = validate_metadata(metadata or {})
    check(cancellation)

    # Cheap pre-check so duplicates do not cost an embedding call. The write
    # below is still conditional on the key being absent.
    if document_store.exists(collection, document_id):
        raise AlreadyExistsError(f"Document '{document_id}' already exists in collection '{collection}'")

    embedding = embed_text(embedder, text, cancellation=cancellation)
    document = Document(id=document_id, text=text, embedding=embedding, metadata=validated)
    document_store.put(collection, document)
    return document


def add_documents(
    collection: str,
    documents: Sequence[NewDocument],
    *,
    embedder: Embedder,
    document_store: DocumentRepository,
    max_workers: int = DEFAULT_MAX_WORKERS,
    cancellation: CancellationToken | None = None,
) -> list[Document]:
    """Ingest ``documents`` concurrently on a bounded worker pool.

    The batch is not atomic. When any document fails, ``BatchIngestError`` is
    raised after every worker finished; the documents that succeeded remain
    stored. No ordering is guaranteed between documents of one batch.
    """
    if not documents:
        return []
    if max_workers <= 0:
        raise ValueError("max_workers must be positive")

    def _ingest(item: NewDocument) -> Document:
        check(cancellation)
        return add_document(
            collection,
            item.id,
            item.text,
            item.metadata,
            embedder=embedder,
            document_store=document_store,
            cancellation=cancellation,
        )

    stored: list[Document] = []
    failures: list[tuple[str, Exception]] = []
    workers = min(max_workers, len(documents))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="vectorkv-ingest") as pool:
        futures = {pool.submit(_ingest, item): item for item in documents}
        for future in as_completed(futures):
            item = futures[future]
            try:
                stored.append(future.result())
            except Exception as exc:
                logger.warning("Failed to ingest document %s into %s: %s", item.id, collection, exc)
                failures.append((item.id, exc))

    logger.info(
        "Batch ingest into %s finished: %d stored, %d failed",
        collection,
        len(stored),
        len(failures),
    )
    if failures:
        error = BatchIngestError(failures, [document.id for document in stored])
        raise error from error.first
    return stored


__all__ = ["add_document", "add_documents", "DEFAULT_MAX_WORKERS"]
