"""Domain entities for the vectorkv store."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

MetadataValue = Union[str, int, float, bool]


@dataclass(slots=True)
class Document:
    """A stored unit: text, its embedding and scalar metadata."""

    id: str
    text: str
    embedding: list[float] = field(default_factory=list)
    metadata: dict[str, MetadataValue] = field(default_factory=dict)


@dataclass(slots=True)
class NewDocument:
    """A document submitted for ingestion, before it has an embedding."""

    id: str
    text: str
    metadata: dict[str, MetadataValue] = field(default_factory=dict)


@dataclass(slots=True)
class QueryMatch:
    """Best match returned by a query."""

    document: Document
    score: float


__all__ = [
    "MetadataValue",
    "Document",
    "NewDocument",
    "QueryMatch",
]
