"""Main CLI entry point for the slices CLI."""

from importlib import metadata
from pathlib import Path

import typer
from rich.console import Console


def get_version() -> str:
    """Get the package version from metadata."""
    try:
        return metadata.version("slice-reader")
    except metadata.PackageNotFoundError:
        return "unknown"


console = Console()

# command: slices
app = typer.Typer(
    name="slices",
    help="Fetch remotely built project slices and delete their build assets",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command("fetch")
def fetch_cmd(
    slice_name: str = typer.Argument(..., help="Name of the slice to fetch"),
    cache_root: Path = typer.Option(
        None, "--cache-root", help="Cache directory (defaults to <temp>/slices)"
    ),
):
    """Fetch a slice into the local cache."""
    from .commands.slices import fetch_command

    return fetch_command(slice_name, cache_root)


@app.command("delete")
def delete_cmd(
    path: Path = typer.Argument(..., help="Local path of a cached slice"),
    cache_root: Path = typer.Option(
        None, "--cache-root", help="Cache directory (defaults to <temp>/slices)"
    ),
):
    """Delete the build assets of a cached slice."""
    from .commands.slices import delete_command

    return delete_command(path, cache_root)


@app.callback(invoke_without_command=True)
def main(
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
):
    """Fetch remotely built project slices and delete their build assets."""
    if version:
        console.print(f"slices v{get_version()}")
        raise typer.Exit()


if __name__ == "__main__":
    app()
