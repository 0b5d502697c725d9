"""SQLite connection layer for the asset catalog."""

from __future__ import annotations

import sqlite3
from pathlib import Path

# Milliseconds a writer waits for a concurrent ingest to release the lock.
_BUSY_TIMEOUT_MS = 5_000


class Database:
    """Catalog database file; parent directories are created on connect.

    Usable directly (``conn = Database(p).connect()``) or as a context manager
    that closes the connection on exit.
    """

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> sqlite3.Connection:
        """Open the catalog with row access by column name and WAL journaling."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute(f"PRAGMA busy_timeout = {_BUSY_TIMEOUT_MS}")
        conn.execute("PRAGMA journal_mode = WAL")
        return conn

    def __enter__(self) -> sqlite3.Connection:
        self._conn = self.connect()
        return self._conn

    def __exit__(self, *args: object) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
