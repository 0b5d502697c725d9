"""assetshelf remove — delete assets from the catalog.

  assetshelf remove 3f2a9c1e                   one asset (ID or unique prefix)
  assetshelf remove --archive layouts.zip      everything from one archive
  assetshelf remove --archive layouts.zip --yes
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from assetshelf.cli.common import find_asset_or_exit, load_cfg_or_exit, open_db, resolve_db
from assetshelf.cli.errors import err_no_db
from assetshelf.db.repository import CatalogRepository

console = Console()


def remove_cmd(
    asset_id: Annotated[
        str | None,
        typer.Argument(help="Asset ID or unique ID prefix.", show_default=False),
    ] = None,
    archive: Annotated[
        str | None,
        typer.Option("--archive", "-a", help="Remove every asset from this archive."),
    ] = None,
    db: Annotated[
        Path | None,
        typer.Option("--db", help="Catalog database (default from config)."),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove one asset, or all assets of an archive, from the catalog."""
    if (asset_id is None) == (archive is None):
        console.print("[red]Error:[/] Give either an asset ID or --archive NAME.")
        raise typer.Exit(1)

    cfg = load_cfg_or_exit(console)
    db_path = resolve_db(db, cfg)
    if not db_path.exists():
        console.print(err_no_db(str(db_path)))
        raise typer.Exit(1)

    conn = open_db(db_path)
    repo = CatalogRepository(conn)
    try:
        if archive is not None:
            _remove_archive(repo, archive, yes)
        elif asset_id is not None:
            _remove_asset(repo, asset_id, yes)
    finally:
        conn.close()


def _remove_asset(repo: CatalogRepository, asset_id: str, yes: bool) -> None:
    asset = find_asset_or_exit(repo, asset_id, console)
    console.print(
        f"\nRemove asset: [bold]{escape(asset.name)}[/] "
        f"[dim]({asset.id}, {escape(asset.category)})[/]"
    )
    _confirm_or_exit(yes)
    repo.delete_asset(asset.id)
    console.print(f"[green]✓[/] Removed: {escape(asset.name)}")


def _remove_archive(repo: CatalogRepository, archive: str, yes: bool) -> None:
    counts = dict(repo.list_archives())
    if archive not in counts:
        console.print(
            f"[yellow]Archive not in catalog:[/] '{escape(archive)}'\n"
            "  Run:  assetshelf status  to list ingested archives."
        )
        raise typer.Exit(0)

    console.print(f"\nRemove archive: [bold]{escape(archive)}[/]  ({counts[archive]} assets)")
    _confirm_or_exit(yes)
    removed = repo.delete_by_archive(archive)
    console.print(f"[green]✓[/] Removed {removed} assets from {escape(archive)}")


def _confirm_or_exit(yes: bool) -> None:
    if not yes and not typer.confirm("Confirm removal?", default=False):
        console.print("[dim]Cancelled.[/]")
        raise typer.Exit(0)
