"""assetshelf CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from assetshelf.cli.ingest import ingest_cmd
from assetshelf.cli.remove import remove_cmd
from assetshelf.cli.search import search_cmd
from assetshelf.cli.show import show_cmd
from assetshelf.cli.status import status_cmd


def _installed_version() -> str:
    try:
        return importlib.metadata.version("assetshelf")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"assetshelf {_installed_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="assetshelf",
    help=(
        "assetshelf — catalog the contents of design asset bundles.\n\n"
        "  assetshelf ingest  Extract and classify the assets in ZIP archives.\n"
        "  assetshelf search  Filter and fuzzy-search the catalog."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """assetshelf — design asset catalog CLI."""


app.command("ingest")(ingest_cmd)
app.command("search")(search_cmd)
app.command("show")(show_cmd)
app.command("remove")(remove_cmd)
app.command("status")(status_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed assetshelf version."""
    typer.echo(f"assetshelf {_installed_version()}")


if __name__ == "__main__":
    app()
