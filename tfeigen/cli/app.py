"""Main Typer application — imports and registers all CLI commands.

Entry point: ``tfeigen`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from tfeigen.cli.commands.generate import generate_cmd
from tfeigen.cli.commands.install import install_cmd
from tfeigen.cli.commands.locate import locate_cmd
from tfeigen.config import EigenSettings

app = typer.Typer(
    name="tfeigen",
    help="Locate, install and describe the Eigen release pinned by a TensorFlow source tree.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="generate", help="Generate CMake files for an Eigen installation.")(generate_cmd)
app.command(name="install", help="Download, build and install Eigen.")(install_cmd)
app.command(name="locate", help="Print the Eigen version pinned by TensorFlow.")(locate_cmd)


@app.callback()
def configure(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log at DEBUG level."
    ),
) -> None:
    """Set up logging before any subcommand runs."""
    level = logging.DEBUG if verbose else EigenSettings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def main() -> None:
    """CLI entry point. Usage errors exit with status 1, like every other failure."""
    try:
        app()
    except SystemExit as exc:
        # Click reports usage errors with status 2
        raise SystemExit(1 if exc.code == 2 else exc.code) from None


if __name__ == "__main__":
    main()
