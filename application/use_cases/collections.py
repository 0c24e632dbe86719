"""Use cases for managing collections.

Collections are implicit: a collection exists as soon as one document is
stored under its key prefix, and creating one writes nothing.
"""
from __future__ import annotations

import logging

from domain.errors import AlreadyExistsError
from domain.interfaces import DocumentRepository
from infrastructure.repositories.keyspace import validate_collection_name

logger = logging.getLogger(__name__)


def create_collection(name: str, *, document_store: DocumentRepository) -> None:
    """Check that ``name`` is usable and not taken yet."""
    validate_collection_name(name)
    if document_store.has_any(name):
        raise AlreadyExistsError(f"Collection '{name}' already exists")
    logger.info("Collection %s is ready", name)


def collection_exists(name: str, *, document_store: DocumentRepository) -> bool:
    return document_store.has_any(name)


__all__ = ["create_collection", "collection_exists"]
