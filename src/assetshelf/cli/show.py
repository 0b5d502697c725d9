"""assetshelf show — asset details and copy-ready JSON.

  assetshelf show 3f2a9c1e                     detail panel
  assetshelf show 3f2a9c1e --format minified   print JSON for pasting
  assetshelf show 3f2a9c1e --format import     reduced importer payload
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from assetshelf.cli.common import find_asset_or_exit, load_cfg_or_exit, open_db, resolve_db
from assetshelf.cli.errors import err_no_copyable, err_no_db
from assetshelf.db.models import Asset, CopyableContent
from assetshelf.db.repository import CatalogRepository

console = Console()

COPY_FORMATS: tuple[str, ...] = ("raw", "minified", "import")


def show_cmd(
    asset_id: Annotated[
        str,
        typer.Argument(help="Asset ID or unique ID prefix.", show_default=False),
    ],
    fmt: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Print copy content: raw, minified or import."),
    ] = None,
    db: Annotated[
        Path | None,
        typer.Option("--db", help="Catalog database (default from config)."),
    ] = None,
) -> None:
    """Show one asset, or print its JSON in a copy format."""
    cfg = load_cfg_or_exit(console)
    db_path = resolve_db(db, cfg)
    if not db_path.exists():
        console.print(err_no_db(str(db_path)))
        raise typer.Exit(1)
    if fmt is not None and fmt not in COPY_FORMATS:
        console.print(
            f"[red]Error:[/] Unknown format '{escape(fmt)}'.\n"
            f"  Use one of: {', '.join(COPY_FORMATS)}"
        )
        raise typer.Exit(1)

    conn = open_db(db_path)
    try:
        asset = find_asset_or_exit(CatalogRepository(conn), asset_id, console)
    finally:
        conn.close()

    if fmt is None:
        console.print(_detail_panel(asset))
        return

    if asset.copyable is None:
        console.print(err_no_copyable(asset.id))
        raise typer.Exit(1)
    typer.echo(copy_text(asset.copyable, fmt))


def copy_text(copyable: CopyableContent, fmt: str) -> str:
    """Text placed on the clipboard for *fmt*."""
    if fmt == "raw":
        return copyable.raw
    if fmt == "minified":
        return copyable.minified
    return json.dumps(copyable.import_format, ensure_ascii=False, indent=2)


def _detail_panel(asset: Asset) -> Panel:
    lines = [
        f"Name:      [bold]{escape(asset.name)}[/]",
        f"ID:        {asset.id}",
        f"Type:      {asset.type}",
        f"Category:  [cyan]{escape(asset.category)}[/]",
        f"Tags:      {escape(', '.join(asset.tags)) or '[dim]none[/]'}",
        f"Archive:   {escape(asset.source_archive)}",
        f"Path:      {escape(asset.path)}",
        f"Size:      {asset.size_bytes:,} bytes",
        f"Added:     [dim]{asset.upload_date}[/]",
    ]
    if asset.description:
        lines.append(f"About:     {escape(asset.description)}")
    if asset.preview is not None:
        lines.append(f"Preview:   {asset.preview.media_type}")
    if asset.copyable is not None:
        lines.append("Copy:      [dim]--format raw | minified | import[/]")
    if asset.metadata:
        lines.append("")
        lines.append("[bold]Metadata[/]")
        for key, value in asset.metadata.items():
            lines.append(f"  {key}: {escape(_short(value))}")
    return Panel("\n".join(lines), title=f"[bold]{escape(asset.name)}[/]", expand=False)


def _short(value: Any, limit: int = 80) -> str:
    text = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
    return text if len(text) <= limit else text[: limit - 1] + "…"
