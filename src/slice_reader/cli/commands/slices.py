"""Slice fetch and delete commands."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.status import Status

from ...core.exceptions import CredentialsError, SliceError
from ...core.models import Slice
from ...runtime.cache import SliceCache
from ...runtime.slices import SliceReader

console = Console()


def _reader(cache_root: Optional[Path]) -> SliceReader:
    return SliceReader(cache=SliceCache(cache_root))


def fetch_command(slice_name: str, cache_root: Optional[Path] = None):
    """Fetch a slice into the local cache and print its path."""
    reader = _reader(cache_root)
    try:
        with Status(f"Fetching slice [bold]{slice_name}[/bold]...", console=console):
            path = asyncio.run(reader.fetch_slice(slice_name))
    except (SliceError, CredentialsError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Slice [bold]{slice_name}[/bold] fetched")
    console.print(str(path))


def delete_command(path: Path, cache_root: Optional[Path] = None):
    """Delete the build assets of a cached slice."""
    reader = _reader(cache_root)
    try:
        slice_name = reader.cache.name_for(path)
        asyncio.run(reader.delete_slice(Slice(name=slice_name, local_path=path)))
    except (SliceError, CredentialsError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"Build assets for [bold]{slice_name}[/bold] removed")
