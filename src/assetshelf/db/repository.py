"""Repository for the persisted asset catalog.

The catalog is an ordered list of Assets. ``load()``/``save()`` move the
whole list; the other methods are conveniences for catalog management
(append an ingest result, edit or delete one asset).
"""

from __future__ import annotations

import json
import sqlite3
import warnings
from dataclasses import replace
from typing import Any

from assetshelf.db.models import Asset

# Fields a user may edit after ingest.
EDITABLE_FIELDS: frozenset[str] = frozenset(
    ["name", "category", "tags", "description", "metadata"]
)

_SELECT = "SELECT id, payload, preview FROM assets"


class CatalogRepository:
    """Data access layer for the asset catalog.

    Wraps an open sqlite3.Connection; the connection is owned by the caller
    and must be closed after use.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialise with an open database connection.

        Args:
            conn: An open sqlite3.Connection with the schema initialised
                (see assetshelf.db.schema.initialize).
        """
        self._conn = conn

    # ------------------------------------------------------------------
    # Whole catalog
    # ------------------------------------------------------------------

    def load(self) -> list[Asset]:
        """Return the full catalog in stored order (empty list if none)."""
        rows = self._conn.execute(f"{_SELECT} ORDER BY position").fetchall()
        return [_row_to_asset(r) for r in rows]

    def save(self, assets: list[Asset]) -> bool:
        """Replace the stored catalog with *assets*.

        Returns:
            True on success. On a database error the previous catalog is kept,
            a ``UserWarning`` is emitted and False is returned.
        """
        try:
            with self._conn:
                self._conn.execute("DELETE FROM assets")
                self._insert(assets, start=0)
        except sqlite3.Error as exc:
            warnings.warn(f"Could not save catalog: {exc}", UserWarning, stacklevel=2)
            return False
        return True

    def count(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM assets").fetchone()[0]

    # ------------------------------------------------------------------
    # Single assets
    # ------------------------------------------------------------------

    def add_assets(self, assets: list[Asset]) -> int:
        """Append *assets* after the existing catalog. Returns the number added."""
        row = self._conn.execute("SELECT MAX(position) FROM assets").fetchone()
        start = 0 if row[0] is None else row[0] + 1
        with self._conn:
            self._insert(assets, start=start)
        return len(assets)

    def get_asset(self, asset_id: str) -> Asset | None:
        """Return an asset by ID, or None if not found."""
        row = self._conn.execute(f"{_SELECT} WHERE id = ?", (asset_id,)).fetchone()
        return _row_to_asset(row) if row else None

    def update_asset(self, asset_id: str, **changes: Any) -> Asset | None:
        """Apply *changes* to an asset and persist it.

        Returns:
            The updated Asset, or None if *asset_id* is not in the catalog.

        Raises:
            ValueError: If a change names a field that is not editable.
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {', '.join(sorted(unknown))}")
        current = self.get_asset(asset_id)
        if current is None:
            return None
        updated = replace(current, **changes)
        with self._conn:
            self._conn.execute(
                "UPDATE assets SET name = ?, category = ?, payload = ? WHERE id = ?",
                (updated.name, updated.category, _payload(updated), asset_id),
            )
        return updated

    def delete_asset(self, asset_id: str) -> bool:
        """Delete an asset. Returns False if it did not exist."""
        with self._conn:
            cur = self._conn.execute("DELETE FROM assets WHERE id = ?", (asset_id,))
        return cur.rowcount > 0

    def delete_by_archive(self, archive_name: str) -> int:
        """Delete every asset that came from *archive_name*. Returns the count."""
        with self._conn:
            cur = self._conn.execute(
                "DELETE FROM assets WHERE source_archive = ?", (archive_name,)
            )
        return cur.rowcount

    def list_archives(self) -> list[tuple[str, int]]:
        """Return [(archive_name, asset_count), ...] in first-ingest order."""
        rows = self._conn.execute(
            """
            SELECT source_archive, COUNT(*) AS n, MIN(position) AS first
            FROM assets GROUP BY source_archive ORDER BY first
            """
        ).fetchall()
        return [(r["source_archive"], r["n"]) for r in rows]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _insert(self, assets: list[Asset], start: int) -> None:
        self._conn.executemany(
            """
            INSERT INTO assets
                (id, position, name, category, type, source_archive, upload_date, payload, preview)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    a.id,
                    start + i,
                    a.name,
                    a.category,
                    a.type,
                    a.source_archive,
                    a.upload_date,
                    _payload(a),
                    a.preview.data if a.preview else None,
                )
                for i, a in enumerate(assets)
            ],
        )


# ------------------------------------------------------------------
# Row ↔ model helpers
# ------------------------------------------------------------------


def _payload(asset: Asset) -> str:
    return json.dumps(asset.to_dict(), ensure_ascii=False)


def _row_to_asset(row: sqlite3.Row) -> Asset:
    preview = row["preview"]
    return Asset.from_dict(
        json.loads(row["payload"]),
        preview=bytes(preview) if preview is not None else None,
    )
