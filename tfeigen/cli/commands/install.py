"""``tfeigen install`` — download, build and install the pinned Eigen.

Resolves the Eigen coordinates from the TensorFlow manifest, downloads the
archive into the download directory, builds it with CMake and Make, installs
it under the install prefix, and removes the scratch files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel

from tfeigen.cli.commands._common import console, print_coordinates, resolve_coordinates
from tfeigen.config import EigenSettings
from tfeigen.core.downloader import ArchiveDownloader, InstallError
from tfeigen.core.installer import EigenInstaller


def install_cmd(
    source_dir: Path = typer.Argument(
        ...,
        help="TensorFlow source directory.",
    ),
    install_dir: Optional[Path] = typer.Argument(
        None,
        help="Install prefix (default: /usr/local).",
        show_default=False,
    ),
    download_dir: Optional[Path] = typer.Argument(
        None,
        help="Scratch directory for the download and build (default: current directory).",
        show_default=False,
    ),
) -> None:
    """Download Eigen to DOWNLOAD_DIR and install it to INSTALL_DIR."""
    settings = EigenSettings()
    coordinates = resolve_coordinates(source_dir, settings)
    print_coordinates(coordinates)

    installer = EigenInstaller(
        install_dir or settings.install_dir,
        download_dir or settings.download_dir,
        downloader=ArchiveDownloader(timeout=settings.download_timeout_seconds),
        verify_checksum=settings.verify_checksum,
        cmake_executable=settings.cmake_executable,
        make_executable=settings.make_executable,
        build_jobs=settings.build_jobs,
    )

    console.print(f"[bold cyan]Downloading Eigen to {installer.download_dir}...[/bold cyan]")
    try:
        include_dir = installer.install(coordinates)
    except InstallError as exc:
        console.print(f"[bold red]Command failed; install terminated:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print(
        Panel(
            "\n".join([
                "[bold green]Installation complete![/bold green]",
                "",
                f"[bold]Prefix:[/bold]   {installer.install_dir}",
                f"[bold]Headers:[/bold]  {include_dir}",
            ]),
            title="[bold]Eigen[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
