"""Forward-only migration runner for the catalog schema."""

from __future__ import annotations

import sqlite3

# schema_version is the bootstrap table, created before migrations run.
_CREATE_SCHEMA_VERSION = """
CREATE TABLE IF NOT EXISTS schema_version (
    version     INTEGER NOT NULL,
    applied_at  DATETIME NOT NULL DEFAULT (datetime('now'))
)
"""

# Queryable columns are denormalised from the JSON payload; the payload is
# the source of truth when loading.
_V1_SQL = """
CREATE TABLE IF NOT EXISTS assets (
    id                  TEXT PRIMARY KEY,
    position            INTEGER NOT NULL,
    name                TEXT NOT NULL,
    category            TEXT NOT NULL,
    type                TEXT NOT NULL,
    source_archive      TEXT NOT NULL,
    upload_date         TEXT NOT NULL,
    payload             TEXT NOT NULL,
    preview             BLOB
);

CREATE INDEX IF NOT EXISTS idx_assets_position ON assets(position);
CREATE INDEX IF NOT EXISTS idx_assets_source_archive ON assets(source_archive);
"""

# Append-only. Each entry: (version: int, sql: str).
# executescript() issues an implicit COMMIT before running.
MIGRATIONS: list[tuple[int, str]] = [
    (1, _V1_SQL),
]


def run_migrations(conn: sqlite3.Connection) -> None:
    """Apply all pending migrations in ascending version order.

    Idempotent: safe to call on a database at any version.
    """
    conn.execute(_CREATE_SCHEMA_VERSION)
    conn.commit()

    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    current = row[0] if row[0] is not None else 0

    for version, sql in MIGRATIONS:
        if version > current:
            conn.executescript(sql)
            conn.execute(
                "INSERT INTO schema_version (version) VALUES (?)", (version,)
            )
            conn.commit()
