"""assetshelf rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from assetshelf.cli.errors import err_no_db
    console.print(err_no_db(".assetshelf.db"))
    raise typer.Exit(1)
"""

from __future__ import annotations


def err_no_db(db_path: str = ".assetshelf.db") -> str:
    """No catalog database at *db_path*."""
    return (
        f"[red]Error:[/] No catalog found at '{db_path}'.\n"
        "  Run:  assetshelf ingest <archive.zip>"
    )


def err_archive_not_found(path: str) -> str:
    return (
        f"[red]✗ Archive not found:[/] '{path}'\n"
        "  Check the path and try again."
    )


def err_archive_unreadable(path: str, reason: str) -> str:
    """The archive could not be opened as a ZIP file."""
    return (
        f"[red]✗ Cannot open archive:[/] '{path}'\n"
        f"  {reason}\n"
        "  Re-download or re-export the bundle as a .zip file and ingest it again."
    )


def err_asset_not_found(asset_id: str) -> str:
    return (
        f"[yellow]Asset not found:[/] '{asset_id}' is not in the catalog.\n"
        "  Run:  assetshelf search  to list asset IDs."
    )


def err_ambiguous_id(prefix: str, matches: list[str]) -> str:
    """An ID prefix matches more than one asset."""
    shown = ", ".join(matches[:5])
    more = f" (+{len(matches) - 5} more)" if len(matches) > 5 else ""
    return (
        f"[red]Error:[/] ID prefix '{prefix}' matches {len(matches)} assets: {shown}{more}\n"
        "  Use a longer prefix or the full asset ID."
    )


def err_no_copyable(asset_id: str) -> str:
    """Copy formats requested for an asset without JSON content."""
    return (
        f"[red]Error:[/] '{asset_id}' has no JSON content.\n"
        "  Copy formats are available for layouts, sections, modules and other JSON assets."
    )


def err_config(message: str) -> str:
    return (
        f"[red]Error:[/] Invalid configuration.\n"
        f"  {message}\n"
        "  Fix assetshelf.yaml (or ~/.assetshelf/config.yaml) and retry."
    )


def err_unknown_sort(order: str, valid: tuple[str, ...]) -> str:
    return (
        f"[red]Error:[/] Unknown sort order '{order}'.\n"
        f"  Use one of: {', '.join(valid)}"
    )


def warn_entry_fallbacks(count: int) -> str:
    """Shown after ingest when some entries were classified by fallback."""
    return (
        f"[yellow]⚠[/] {count} entr{'y' if count == 1 else 'ies'} could not be fully processed "
        "and were classified from the filename only."
    )
