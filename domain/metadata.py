"""Equality matching of document metadata against query filters."""
from __future__ import annotations

import math
from typing import Any, Mapping

from domain.entities import MetadataValue
from domain.errors import InvalidMetadataError

_MISSING = object()


def scalar_kind(value: Any) -> str | None:
    """Return the scalar kind of a metadata value or ``None`` if unsupported."""
    # bool is an int subclass, check it first.
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return None


def validate_metadata(metadata: Mapping[str, Any]) -> dict[str, MetadataValue]:
    """Return a plain copy of ``metadata`` after checking every entry."""
    validated: dict[str, MetadataValue] = {}
    for key, value in metadata.items():
        if not isinstance(key, str):
            raise InvalidMetadataError(f"Metadata keys must be strings, got {type(key).__name__}")
        if scalar_kind(value) is None:
            raise InvalidMetadataError(
                f"Metadata value for '{key}' must be a string, number or boolean, "
                f"got {type(value).__name__}"
            )
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidMetadataError(f"Metadata value for '{key}' must be finite")
        validated[key] = value
    return validated


def normalize_filter(metadata_filter: Mapping[str, MetadataValue] | None) -> dict[str, MetadataValue]:
    """Lower-case filter keys. Values are left untouched."""
    if not metadata_filter:
        return {}
    return {key.lower(): value for key, value in metadata_filter.items()}


def values_equal(stored: Any, expected: Any) -> bool:
    kind = scalar_kind(stored)
    return kind is not None and kind == scalar_kind(expected) and stored == expected


def matches(metadata: Mapping[str, Any], metadata_filter: Mapping[str, MetadataValue]) -> bool:
    """Return True when every filter entry is present and equal in ``metadata``.

    Filter keys are lower-cased and looked up as is in ``metadata``. Values must
    have the same scalar kind: ``"3"`` never equals ``3`` and ``True`` never
    equals ``1``.
    """
    for key, expected in metadata_filter.items():
        stored = metadata.get(key.lower(), _MISSING)
        if stored is _MISSING or not values_equal(stored, expected):
            return False
    return True


__all__ = ["scalar_kind", "validate_metadata", "normalize_filter", "values_equal", "matches"]
