"""Durable ordered key-value store on top of SQLite."""
from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Iterator

from domain.interfaces import KeyValueStore

logger = logging.getLogger(__name__)


class SqliteKeyValueStore(KeyValueStore):
    """Stores keys and values as BLOBs and scans them in byte order.

    SQLite compares BLOBs with ``memcmp`` so ``ORDER BY key`` is the
    byte-lexicographic order. Every operation opens its own connection, which
    makes one instance safe to share between threads.
    """

    def __init__(self, db_path: str | Path = "vectorkv.db", *, busy_timeout: float = 30.0) -> None:
        self._db_path = Path(db_path)
        self._busy_timeout = busy_timeout
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, timeout=self._busy_timeout)
        conn.execute("PRAGMA synchronous = FULL")
        return conn

    def _ensure_schema(self) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute("PRAGMA journal_mode = WAL")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key BLOB PRIMARY KEY,
                    value BLOB NOT NULL
                ) WITHOUT ROWID
                """
            )

    def get(self, key: bytes) -> bytes | None:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return bytes(row[0])

    def put(self, key: bytes, value: bytes) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute("REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value))

    def put_if_absent(self, key: bytes, value: bytes) -> bool:
        with closing(self._connect()) as conn, conn:
            cursor = conn.execute("INSERT OR IGNORE INTO kv (key, value) VALUES (?, ?)", (key, value))
            written = cursor.rowcount == 1
        if not written:
            logger.debug("Key %r already present, insert skipped", key)
        return written

    def scan(self, lower: bytes, upper: bytes) -> Iterator[tuple[bytes, bytes]]:
        with closing(self._connect()) as conn:
            cursor = conn.execute(
                """
                SELECT key, value
                FROM kv
                WHERE key >= ? AND key < ?
                ORDER BY key
                """,
                (lower, upper),
            )
            for key, value in cursor:
                yield bytes(key), bytes(value)


__all__ = ["SqliteKeyValueStore"]
