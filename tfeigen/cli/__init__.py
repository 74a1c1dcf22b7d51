"""tfeigen CLI — Typer-based command-line interface.

Provides the ``tfeigen`` command with ``install``, ``generate`` and
``locate`` subcommands. All output uses Rich for formatted terminal display.
"""
