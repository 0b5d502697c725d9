"""assetshelf ingest — extract ZIP bundles into the asset catalog.

Each archive is opened, every entry is classified and tagged, and the
resulting assets are appended to the catalog. An archive that cannot be
opened is reported and skipped; entries that fail individually are kept with
a filename-only classification and listed as warnings.
"""

from __future__ import annotations

import warnings
from collections import Counter
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from assetshelf.cli.common import load_cfg_or_exit, open_db, resolve_db
from assetshelf.cli.errors import (
    err_archive_not_found,
    err_archive_unreadable,
    warn_entry_fallbacks,
)
from assetshelf.db.models import Asset
from assetshelf.db.repository import CatalogRepository
from assetshelf.ingest.archive import ArchiveExtractor, ArchiveOpenError
from assetshelf.ingest.base import AssetWarning

console = Console()


def ingest_cmd(
    archives: Annotated[
        list[Path],
        typer.Argument(help="ZIP archive(s) to ingest.", show_default=False),
    ],
    db: Annotated[
        Path | None,
        typer.Option("--db", help="Catalog database (default from config: .assetshelf.db)."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be ingested without writing."),
    ] = False,
) -> None:
    """Extract, classify and catalog the assets in one or more archives."""
    cfg = load_cfg_or_exit(console)
    db_path = resolve_db(db, cfg)
    extractor = ArchiveExtractor(
        max_text_bytes=cfg.ingest.max_text_bytes,
        decompose_primary=cfg.ingest.decompose_primary,
    )

    conn = None if dry_run else open_db(db_path)
    repo = CatalogRepository(conn) if conn is not None else None
    failures = 0
    try:
        for archive in archives:
            assets = _process_archive(archive, extractor)
            if assets is None:
                failures += 1
                continue
            if repo is None:
                console.print("  [dim]Dry run — nothing written to the catalog[/]")
                continue
            repo.add_assets(assets)
            console.print(f"  [green]✓[/] Stored in {db_path}")
    finally:
        if conn is not None:
            conn.close()

    if failures and failures == len(archives):
        raise typer.Exit(1)


# ------------------------------------------------------------------
# Per-archive pipeline
# ------------------------------------------------------------------


def _process_archive(
    archive: Path,
    extractor: ArchiveExtractor,
) -> list[Asset] | None:
    """Extract one archive. Returns None when it could not be opened."""
    console.print(f"\n[bold]→ {archive}[/]")

    if not archive.is_file():
        console.print(err_archive_not_found(str(archive)))
        return None

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", AssetWarning)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as prog:
            prog.add_task("Extracting…", total=None)
            try:
                assets = extractor.ingest(archive.read_bytes(), archive.name)
            except ArchiveOpenError as exc:
                console.print(err_archive_unreadable(str(archive), str(exc.__cause__ or exc)))
                return None

    console.print(f"  [green]✓[/] {len(assets)} assets")
    _show_breakdown(assets)

    entry_warnings = [w for w in caught if issubclass(w.category, AssetWarning)]
    if entry_warnings:
        console.print(f"  {warn_entry_fallbacks(len(entry_warnings))}")
        for w in entry_warnings:
            console.print(f"    {w.message}", style="dim", markup=False, highlight=False)
    return assets


def _show_breakdown(assets: list[Asset]) -> None:
    counts = Counter(a.category for a in assets)
    if not counts:
        return
    summary = " · ".join(f"{cat} {n}" for cat, n in counts.most_common())
    console.print(f"  [dim]{summary}[/]")
