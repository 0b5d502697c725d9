"""assetshelf search — filter and fuzzy-search the catalog.

  assetshelf search                       all assets (config default sort)
  assetshelf search hero                  fuzzy match, best first
  assetshelf search -c layout -t pricing  category + tag filters (tags AND-ed)
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from assetshelf.cli.common import load_cfg_or_exit, open_db, resolve_db
from assetshelf.cli.errors import err_no_db, err_unknown_sort
from assetshelf.db.models import Asset
from assetshelf.db.repository import CatalogRepository
from assetshelf.search.facets import SORT_ORDERS, sort_assets
from assetshelf.search.query import ALL_CATEGORIES, filter_assets, rank_assets

console = Console()


def search_cmd(
    term: Annotated[
        str,
        typer.Argument(help="Fuzzy search term (omit to list)."),
    ] = "",
    category: Annotated[
        str,
        typer.Option("--category", "-c", help="Exact category filter ('all' = no filter)."),
    ] = ALL_CATEGORIES,
    tag: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Required tag (repeatable, all must match)."),
    ] = None,
    sort: Annotated[
        str | None,
        typer.Option("--sort", help=f"Sort order: {', '.join(SORT_ORDERS)}."),
    ] = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=1, help="Maximum rows to show."),
    ] = 50,
    threshold: Annotated[
        float | None,
        typer.Option("--threshold", min=0.0, max=1.0, help="Minimum similarity (0–1)."),
    ] = None,
    db: Annotated[
        Path | None,
        typer.Option("--db", help="Catalog database (default from config)."),
    ] = None,
) -> None:
    """Search the catalog by category, tags and fuzzy text."""
    cfg = load_cfg_or_exit(console)
    db_path = resolve_db(db, cfg)
    if not db_path.exists():
        console.print(err_no_db(str(db_path)))
        raise typer.Exit(1)
    if sort is not None and sort not in SORT_ORDERS:
        console.print(err_unknown_sort(sort, SORT_ORDERS))
        raise typer.Exit(1)

    conn = open_db(db_path)
    try:
        catalog = CatalogRepository(conn).load()
    finally:
        conn.close()

    filtered = filter_assets(catalog, category, tag or [])
    scores: dict[str, float] = {}
    if term.strip():
        ranked = rank_assets(
            filtered,
            term.strip(),
            threshold=threshold if threshold is not None else cfg.search.threshold,
        )
        scores = {s.asset.id: s.score for s in ranked}
        results = [s.asset for s in ranked]
        if sort is not None:
            results = sort_assets(results, sort)
    else:
        results = sort_assets(filtered, sort or cfg.search.default_sort)

    if not results:
        console.print("[yellow]No matching assets.[/]")
        return

    console.print(_results_table(results[:limit], scores))
    if len(results) > limit:
        console.print(f"[dim]… {len(results) - limit} more (use --limit)[/]")


def _results_table(assets: list[Asset], scores: dict[str, float]) -> Table:
    table = Table(title=f"{len(assets)} assets", show_lines=False)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name")
    table.add_column("Category", style="cyan")
    table.add_column("Type")
    table.add_column("Tags", style="dim")
    table.add_column("Archive", style="dim")
    if scores:
        table.add_column("Score", justify="right")
    for asset in assets:
        row = [
            asset.id[:8],
            asset.name,
            asset.category,
            asset.type,
            ", ".join(asset.tags),
            asset.source_archive,
        ]
        if scores:
            row.append(f"{scores.get(asset.id, 0.0):.2f}")
        table.add_row(*row)
    return table
