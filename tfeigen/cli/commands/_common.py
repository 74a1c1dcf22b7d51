"""Helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from tfeigen.config import EigenSettings
from tfeigen.core.locator import VersionLocator, VersionNotFoundError
from tfeigen.core.manifest import ManifestNotFoundError, resolve_manifest
from tfeigen.models.coordinates import LibraryCoordinates

console = Console()


def resolve_coordinates(source_dir: Path, settings: EigenSettings) -> LibraryCoordinates:
    """Locate the Eigen coordinates in *source_dir*, exiting 1 on failure."""
    locator = VersionLocator.for_archive(
        settings.archive_name, settings.version_label, settings.hash_label
    )
    try:
        manifest = resolve_manifest(source_dir, settings.manifest_path)
        return locator.locate(manifest)
    except (ManifestNotFoundError, VersionNotFoundError) as exc:
        console.print(f"[bold red]Failure:[/bold red] {exc}")
        raise typer.Exit(code=1)


def print_coordinates(coordinates: LibraryCoordinates) -> None:
    console.print()
    console.print(
        Panel(
            "\n".join([
                f"[bold]Eigen URL:[/bold]           {coordinates.url}",
                f"[bold]Eigen URL Hash:[/bold]      {coordinates.content_hash}",
                f"[bold]Eigen Archive Hash:[/bold]  {coordinates.archive_hash}",
            ]),
            title="[bold]Eigen[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )
    )
    console.print()
