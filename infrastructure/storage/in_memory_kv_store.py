"""Ordered key-value store kept in memory for demos and tests."""
from __future__ import annotations

import bisect
import threading
from typing import Iterator

from domain.interfaces import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Keeps a sorted key list next to a dict and guards both with a lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._keys: list[bytes] = []
        self._values: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        with self._lock:
            return self._values.get(key)

    def put(self, key: bytes, value: bytes) -> None:
        with self._lock:
            if key not in self._values:
                bisect.insort(self._keys, key)
            self._values[key] = bytes(value)

    def put_if_absent(self, key: bytes, value: bytes) -> bool:
        with self._lock:
            if key in self._values:
                return False
            bisect.insort(self._keys, key)
            self._values[key] = bytes(value)
            return True

    def scan(self, lower: bytes, upper: bytes) -> Iterator[tuple[bytes, bytes]]:
        # Snapshot the range so writers are not blocked while the caller iterates.
        with self._lock:
            start = bisect.bisect_left(self._keys, lower)
            end = bisect.bisect_left(self._keys, upper)
            items = [(key, self._values[key]) for key in self._keys[start:end]]
        yield from items


__all__ = ["InMemoryKeyValueStore"]
