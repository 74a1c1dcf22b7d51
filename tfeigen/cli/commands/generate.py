"""``tfeigen generate`` — write CMake files for the pinned Eigen.

Checks that the pinned release is installed under INSTALL_DIR, writes
``Eigen_VERSION.cmake`` to CMAKE_DIR, and copies ``FindEigen.cmake``
(installed mode) or ``Eigen.cmake`` (external mode) next to it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from tfeigen.cli.commands._common import console, print_coordinates, resolve_coordinates
from tfeigen.config import EigenSettings
from tfeigen.core.generator import CMakeGenerator, InstallationNotFoundError
from tfeigen.models.coordinates import IntegrationMode


def generate_cmd(
    mode: IntegrationMode = typer.Argument(
        ...,
        help="'installed' to use an existing installation, 'external' to fetch Eigen at CMake time.",
    ),
    source_dir: Path = typer.Argument(
        ...,
        help="TensorFlow source directory.",
    ),
    cmake_dir: Optional[Path] = typer.Argument(
        None,
        help="Directory to write the CMake files to (default: current directory).",
        show_default=False,
    ),
    install_dir: Optional[Path] = typer.Argument(
        None,
        help="Directory Eigen was installed to (default: /usr/local).",
        show_default=False,
    ),
) -> None:
    """Generate the CMake files for the Eigen release TensorFlow pins."""
    settings = EigenSettings()
    coordinates = resolve_coordinates(source_dir, settings)
    print_coordinates(coordinates)

    generator = CMakeGenerator(
        install_dir or settings.install_dir,
        cmake_dir or settings.cmake_dir,
    )
    try:
        written = generator.generate(coordinates, mode)
    except InstallationNotFoundError as exc:
        console.print(f"[bold red]Failure:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except OSError as exc:
        console.print(f"[bold red]Command failed; could not write CMake files:[/bold red] {exc}")
        raise typer.Exit(code=1)

    names = " and ".join(path.name for path in written)
    console.print(f"[bold green]Wrote {names} to {generator.cmake_dir}[/bold green]")
