"""Shared pytest fixtures."""

from __future__ import annotations

import io
import json
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from assetshelf.db.connection import Database
from assetshelf.db.repository import CatalogRepository
from assetshelf.db.schema import initialize


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """No user/global config or ASSETSHELF_* variables leak into tests."""
    monkeypatch.delenv("ASSETSHELF_DB", raising=False)
    monkeypatch.delenv("ASSETSHELF_SEARCH_THRESHOLD", raising=False)
    monkeypatch.setattr(
        "assetshelf.config._GLOBAL_CONFIG_PATH", tmp_path / "no-global" / "config.yaml"
    )
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def tmp_db(tmp_path):
    """File-based DB in tmp_path with schema initialized, closed after test."""
    db = Database(tmp_path / ".assetshelf.db")
    conn = db.connect()
    initialize(conn)
    yield conn
    conn.close()


@pytest.fixture
def repo(tmp_db):
    return CatalogRepository(tmp_db)


@pytest.fixture
def make_zip() -> Callable[..., bytes]:
    """Build an in-memory ZIP: ``make_zip({"a.json": {...}, "b.png": b"..."})``.

    dict/list values are stored as JSON, str as UTF-8, bytes verbatim.
    A name ending in "/" becomes a directory entry.
    """

    def _make(entries: dict[str, object]) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
            for name, value in entries.items():
                if name.endswith("/"):
                    zf.writestr(zipfile.ZipInfo(name), b"")
                elif isinstance(value, (dict, list)):
                    zf.writestr(name, json.dumps(value))
                elif isinstance(value, str):
                    zf.writestr(name, value.encode("utf-8"))
                else:
                    zf.writestr(name, value)
        return buf.getvalue()

    return _make


@pytest.fixture
def write_zip(tmp_path, make_zip) -> Callable[..., Path]:
    """Like make_zip, but writes the archive to tmp_path and returns its path."""

    def _write(name: str, entries: dict[str, object]) -> Path:
        path = tmp_path / name
        path.write_bytes(make_zip(entries))
        return path

    return _write
