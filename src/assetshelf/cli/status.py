"""assetshelf status — catalog overview.

Shows dashboard counts, the category breakdown, the most used tags and the
ingested archives.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from assetshelf.cli.common import load_cfg_or_exit, open_db, resolve_db
from assetshelf.db.models import Asset
from assetshelf.db.repository import CatalogRepository
from assetshelf.search.facets import catalog_stats, tag_counts

console = Console()


def status_cmd(
    db: Annotated[
        Path | None,
        typer.Option("--db", help="Catalog database (default from config)."),
    ] = None,
    top_tags: Annotated[
        int,
        typer.Option("--top-tags", min=0, help="Number of most used tags to list."),
    ] = 10,
) -> None:
    """Show catalog statistics, categories, tags and archives."""
    cfg = load_cfg_or_exit(console)
    db_path = resolve_db(db, cfg)

    if not db_path.exists():
        console.print(
            Panel(
                f"[yellow]No catalog found at '{escape(str(db_path))}'.[/]\n"
                "  Run:  assetshelf ingest <archive.zip>",
                title="[bold]Catalog[/]",
                expand=False,
            )
        )
        return

    conn = open_db(db_path)
    try:
        repo = CatalogRepository(conn)
        assets = repo.load()
        archives = repo.list_archives()
    finally:
        conn.close()

    _show_stats_panel(db_path, assets)
    if not assets:
        return
    _show_categories(assets)
    _show_tags(assets, top_tags)
    _show_archives(archives)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _show_stats_panel(db_path: Path, assets: list[Asset]) -> None:
    stats = catalog_stats(assets)
    size_mb = db_path.stat().st_size / (1024 * 1024)
    lines = [
        f"Database:  {escape(str(db_path))} ({size_mb:.1f} MB)",
        f"Assets: [bold]{stats.total}[/]  |  "
        f"Layouts: [bold]{stats.layouts}[/]  |  "
        f"Images: [bold]{stats.images}[/]  |  "
        f"Modules: [bold]{stats.modules}[/]",
        f"Categories: [bold]{stats.categories}[/]  |  Tags: [bold]{stats.tags}[/]",
    ]
    if not assets:
        lines.append("[dim]No assets ingested yet.[/]")
    console.print(Panel("\n".join(lines), title="[bold]Catalog[/]", expand=False))


def _show_categories(assets: list[Asset]) -> None:
    table = Table(title="Categories")
    table.add_column("Category", style="cyan")
    table.add_column("Assets", justify="right")
    for category, n in Counter(a.category for a in assets).most_common():
        table.add_row(category, str(n))
    console.print(table)


def _show_tags(assets: list[Asset], limit: int) -> None:
    if limit == 0:
        return
    common = tag_counts(assets).most_common(limit)
    if not common:
        return
    summary = "  ".join(f"{escape(tag)} [dim]({n})[/]" for tag, n in common)
    console.print(Panel(summary, title="[bold]Top tags[/]", expand=False))


def _show_archives(archives: list[tuple[str, int]]) -> None:
    table = Table(title="Archives")
    table.add_column("Archive")
    table.add_column("Assets", justify="right")
    for name, n in archives:
        table.add_row(name, str(n))
    console.print(table)
