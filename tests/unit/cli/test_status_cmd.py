"""Tests for assetshelf status and version commands."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from assetshelf.cli.main import app
from assetshelf.db.connection import Database
from assetshelf.db.models import Asset
from assetshelf.db.repository import CatalogRepository
from assetshelf.db.schema import initialize

runner = CliRunner()


def _seed(path: Path, assets: list[Asset]) -> Path:
    conn = Database(path).connect()
    initialize(conn)
    CatalogRepository(conn).add_assets(assets)
    conn.close()
    return path


def _asset(name: str, category: str, tags: list[str], archive: str = "pack.zip", **kw) -> Asset:
    return Asset(
        name=name,
        original_name=name,
        path=name,
        source_archive=archive,
        category=category,
        tags=tags,
        **kw,
    )


# ---------------------------------------------------------------------------
# assetshelf --version
# ---------------------------------------------------------------------------


def test_version_flag_exits_zero() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "assetshelf" in result.output


def test_version_command_shows_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "assetshelf" in result.output


# ---------------------------------------------------------------------------
# assetshelf status
# ---------------------------------------------------------------------------


def test_status_no_db(tmp_path: Path) -> None:
    result = runner.invoke(app, ["status", "--db", str(tmp_path / "missing.db")])
    assert result.exit_code == 0
    assert "No catalog found" in result.output


def test_status_empty_catalog(tmp_path: Path) -> None:
    db = _seed(tmp_path / "cat.db", [])
    result = runner.invoke(app, ["status", "--db", str(db)])
    assert result.exit_code == 0
    assert "No assets ingested yet" in result.output


def test_status_counts(tmp_path: Path) -> None:
    db = _seed(
        tmp_path / "cat.db",
        [
            _asset("full", "layout", ["dark"]),
            _asset("logo", "logo", ["dark"], type="image"),
            _asset("blurb", "module", ["hero"], archive="mods.zip"),
            _asset("text", "module-text", []),
        ],
    )
    result = runner.invoke(app, ["status", "--db", str(db)])
    assert result.exit_code == 0, result.output
    assert "Assets: 4" in result.output
    assert "Layouts: 1" in result.output
    assert "Images: 1" in result.output
    assert "Modules: 2" in result.output
    assert "dark (2)" in result.output
    assert "mods.zip" in result.output


def test_status_top_tags_zero_hides_tags(tmp_path: Path) -> None:
    db = _seed(tmp_path / "cat.db", [_asset("full", "layout", ["dark"])])
    result = runner.invoke(app, ["status", "--top-tags", "0", "--db", str(db)])
    assert result.exit_code == 0
    assert "Top tags" not in result.output
