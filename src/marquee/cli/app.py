# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import typer

from marquee.cli.commands import config as config_cmd

app = typer.Typer(
    name="marquee",
    help="Caching and subscription lifecycle core for the movie picker",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config", help="Inspect configuration")


@app.callback()
def main() -> None:
    """Apply the configured log level and format before any command runs."""
    from marquee.core.config import get_settings
    from marquee.core.logging import configure_logging

    configure_logging(get_settings())


@app.command()
def version() -> None:
    """Print the marquee version."""
    from marquee import __version__

    typer.echo(f"marquee {__version__}")
