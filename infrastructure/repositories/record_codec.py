"""Serialization of documents into stored records.

Records are UTF-8 JSON objects::

    {"version": 1, "id": ..., "text": ..., "embedding": [...], "metadata": {...}}

Records without a ``version`` field are read as the legacy layout that used
capitalised field names (``ID``, ``Text``, ``Embedding``, ``Metadata``).
Legacy metadata could hold ``null`` or nested values; those entries are dropped
when read because only string, number and boolean values can be filtered on.
"""
from __future__ import annotations

import json
import logging
from typing import Any

from domain.entities import Document
from domain.errors import CorruptRecordError, InvalidMetadataError
from domain.metadata import scalar_kind, validate_metadata

logger = logging.getLogger(__name__)

RECORD_VERSION = 1

_LEGACY_FIELDS = {"id": "ID", "text": "Text", "embedding": "Embedding", "metadata": "Metadata"}


def encode_document(document: Document) -> bytes:
    payload = {
        "version": RECORD_VERSION,
        "id": document.id,
        "text": document.text,
        "embedding": [float(value) for value in document.embedding],
        "metadata": dict(document.metadata),
    }
    return json.dumps(payload, ensure_ascii=False, allow_nan=False).encode("utf-8")


def decode_document(key: bytes, raw: bytes) -> Document:
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CorruptRecordError(key, f"invalid JSON ({exc})") from exc
    if not isinstance(payload, dict):
        raise CorruptRecordError(key, "record is not a JSON object")

    version = payload.get("version")
    if version is None:
        fields = {name: payload.get(legacy) for name, legacy in _LEGACY_FIELDS.items()}
        if isinstance(fields["metadata"], dict):
            fields["metadata"] = _scalar_entries(key, fields["metadata"])
    # bool is an int subclass and True == 1.
    elif type(version) is int and version == RECORD_VERSION:
        fields = {name: payload.get(name) for name in _LEGACY_FIELDS}
    else:
        raise CorruptRecordError(key, f"unsupported record version {version!r}")
    return _build_document(key, fields)


def _scalar_entries(key: bytes, metadata: dict[str, Any]) -> dict[str, Any]:
    kept = {name: value for name, value in metadata.items() if scalar_kind(value) is not None}
    dropped = sorted(set(metadata) - set(kept))
    if dropped:
        logger.warning("Dropping non-scalar legacy metadata %s from record %r", dropped, key)
    return kept


def _build_document(key: bytes, fields: dict[str, Any]) -> Document:
    document_id = fields["id"]
    text = fields["text"]
    embedding = fields["embedding"] if fields["embedding"] is not None else []
    metadata = fields["metadata"] if fields["metadata"] is not None else {}

    if not isinstance(document_id, str) or not document_id:
        raise CorruptRecordError(key, "missing document id")
    if not isinstance(text, str):
        raise CorruptRecordError(key, "text is not a string")
    if not isinstance(embedding, list) or any(
        isinstance(value, bool) or not isinstance(value, (int, float)) for value in embedding
    ):
        raise CorruptRecordError(key, "embedding is not a list of numbers")
    if not isinstance(metadata, dict):
        raise CorruptRecordError(key, "metadata is not an object")
    try:
        metadata = validate_metadata(metadata)
    except InvalidMetadataError as exc:
        raise CorruptRecordError(key, str(exc)) from exc

    return Document(
        id=document_id,
        text=text,
        embedding=[float(value) for value in embedding],
        metadata=metadata,
    )


__all__ = ["RECORD_VERSION", "encode_document", "decode_document"]
