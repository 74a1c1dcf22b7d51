"""``tfeigen locate`` — print the Eigen coordinates pinned by a TensorFlow tree."""

from __future__ import annotations

from pathlib import Path

import typer

from tfeigen.cli.commands._common import print_coordinates, resolve_coordinates
from tfeigen.config import EigenSettings


def locate_cmd(
    source_dir: Path = typer.Argument(
        ...,
        help="TensorFlow source directory.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the coordinates as a JSON object.",
    ),
) -> None:
    """Resolve the Eigen URL, SHA-256 and archive hash without acting on them."""
    coordinates = resolve_coordinates(source_dir, EigenSettings())

    if as_json:
        # Plain echo so the output stays machine-readable
        typer.echo(coordinates.model_dump_json(indent=2))
        return

    print_coordinates(coordinates)
