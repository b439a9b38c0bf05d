"""SQLite backend: a single-file B-tree store from the standard library."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from .base import BackendAdapter, DeleteError, OpenError, ReadError, WriteError

DB_FILENAME = "bench.db"
TABLE = "bench"


class SqliteBackend(BackendAdapter):
    """Autocommit mode with ``synchronous=FULL``: every statement is synced."""

    name = "SQLite"
    location_name = "sqlite_bench"

    def open(self, location: Path) -> sqlite3.Connection:
        location = Path(location)
        try:
            location.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(location / DB_FILENAME), isolation_level=None)
        except (OSError, sqlite3.Error) as e:
            raise OpenError(str(e)) from e
        try:
            conn.execute("PRAGMA synchronous=FULL")
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {TABLE} "
                "(key BLOB PRIMARY KEY, value BLOB NOT NULL) WITHOUT ROWID"
            )
        except sqlite3.Error as e:
            conn.close()
            raise OpenError(str(e)) from e
        return conn

    def put(self, handle: sqlite3.Connection, key: bytes, value: bytes) -> None:
        try:
            handle.execute(
                f"INSERT OR REPLACE INTO {TABLE} (key, value) VALUES (?, ?)",
                (key, value),
            )
        except sqlite3.Error as e:
            raise WriteError(str(e)) from e

    def get(self, handle: sqlite3.Connection, key: bytes) -> bytes:
        try:
            row = handle.execute(
                f"SELECT value FROM {TABLE} WHERE key = ?", (key,),
            ).fetchone()
        except sqlite3.Error as e:
            raise ReadError(str(e)) from e
        if row is None:
            raise ReadError(f"key not found: {key!r}")
        return bytes(row[0])

    def delete(self, handle: sqlite3.Connection, key: bytes) -> None:
        try:
            cur = handle.execute(f"DELETE FROM {TABLE} WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise DeleteError(str(e)) from e
        if cur.rowcount == 0:
            raise DeleteError(f"key not found: {key!r}")

    def _release(self, handle: sqlite3.Connection) -> None:
        handle.close()
