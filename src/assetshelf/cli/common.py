"""Helpers shared by the assetshelf CLI commands."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import typer
from rich.console import Console

from assetshelf.cli.errors import err_ambiguous_id, err_asset_not_found, err_config
from assetshelf.config import AssetshelfConfig, ConfigError, load_config
from assetshelf.db.connection import Database
from assetshelf.db.models import Asset
from assetshelf.db.repository import CatalogRepository
from assetshelf.db.schema import initialize


def load_cfg_or_exit(console: Console) -> AssetshelfConfig:
    try:
        return load_config()
    except ConfigError as exc:
        console.print(err_config(str(exc)))
        raise typer.Exit(1) from exc


def resolve_db(db: Path | None, cfg: AssetshelfConfig) -> Path:
    """``--db`` wins over configuration."""
    return db if db is not None else Path(cfg.catalog.db_path)


def open_db(db_path: Path) -> sqlite3.Connection:
    """Open (or create) the catalog database and run migrations."""
    conn = Database(db_path).connect()
    initialize(conn)
    return conn


def find_asset_or_exit(repo: CatalogRepository, asset_id: str, console: Console) -> Asset:
    """Resolve a full asset ID or a unique prefix of one."""
    asset = repo.get_asset(asset_id)
    if asset is not None:
        return asset
    matches = [a for a in repo.load() if a.id.startswith(asset_id)]
    if not matches:
        console.print(err_asset_not_found(asset_id))
        raise typer.Exit(1)
    if len(matches) > 1:
        console.print(err_ambiguous_id(asset_id, [a.id for a in matches]))
        raise typer.Exit(1)
    return matches[0]
