"""Use case that finds the document most similar to a query."""
from __future__ import annotations

import logging
from typing import Mapping

from application.use_cases.embedding_utils import embed_text
from domain.cancellation import CancellationToken, check
from domain.entities import MetadataValue, QueryMatch
from domain.interfaces import DocumentRepository, Embedder
from domain.metadata import matches, normalize_filter
from domain.similarity import cosine_similarity
from infrastructure.repositories.keyspace import validate_collection_name

logger = logging.getLogger(__name__)


def query(
    collection: str,
    query_text: str,
    metadata_filter: Mapping[str, MetadataValue] | None = None,
    *,
    embedder: Embedder,
    document_store: DocumentRepository,
    cancellation: CancellationToken | None = None,
) -> QueryMatch | None:
    """Return the best match for ``query_text`` or ``None``.

    Every document of the collection is scanned. Documents rejected by the
    metadata filter or whose embedding length differs from the query's are
    skipped. Ties keep the first document in key order; a NaN score never
    wins. ``None`` means the collection is empty or nothing passed the filter.
    """
    validate_collection_name(collection)
    query_embedding = embed_text(embedder, query_text, cancellation=cancellation)
    normalized_filter = normalize_filter(metadata_filter)

    best: QueryMatch | None = None
    best_score = float("-inf")
    scanned = 0
    for document in document_store.scan_all(collection):
        check(cancellation)
        scanned += 1
        if not matches(document.metadata, normalized_filter):
            continue
        if len(document.embedding) != len(query_embedding):
            continue
        score = cosine_similarity(query_embedding, document.embedding)
        if score > best_score:
            best_score = score
            best = QueryMatch(document=document, score=score)

    logger.debug(
        "Query on %s scanned %d documents, best match: %s",
        collection,
        scanned,
        best.document.id if best else None,
    )
    return best


__all__ = ["query"]
