"""Key layout for documents: ``<collection>:<document id>`` as UTF-8 bytes."""
from __future__ import annotations

from domain.errors import InvalidNameError

SEPARATOR = b":"
# The byte right after ":" bounds every key that starts with "<name>:".
COLLECTION_UPPER = b";"
# UTF-8 never produces 0xFF, so it sorts after any encoded document id.
SCAN_UPPER = b"\xff"


def _encode(value: str, what: str) -> bytes:
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidNameError(f"{what} '{value!r}' is not valid UTF-8") from exc


def validate_collection_name(name: str) -> bytes:
    """Return the encoded collection name or raise ``InvalidNameError``."""
    if not isinstance(name, str) or not name:
        raise InvalidNameError("Collection name must be a non-empty string")
    if ":" in name or ";" in name:
        raise InvalidNameError(f"Collection name '{name}' must not contain ':' or ';'")
    return _encode(name, "Collection name")


def document_key(collection: str, document_id: str) -> bytes:
    prefix = validate_collection_name(collection)
    if not isinstance(document_id, str) or not document_id:
        raise InvalidNameError("Document id must be a non-empty string")
    return prefix + SEPARATOR + _encode(document_id, "Document id")


def collection_bounds(collection: str) -> tuple[bytes, bytes]:
    """Bounds ``[name:, name;)`` used to decide whether a collection exists."""
    prefix = validate_collection_name(collection)
    return prefix + SEPARATOR, prefix + COLLECTION_UPPER


def scan_bounds(collection: str) -> tuple[bytes, bytes]:
    """Bounds ``[name:, name:\\xff)`` used to scan every document of a collection."""
    prefix = validate_collection_name(collection) + SEPARATOR
    return prefix, prefix + SCAN_UPPER


__all__ = ["validate_collection_name", "document_key", "collection_bounds", "scan_bounds"]
