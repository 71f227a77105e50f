# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Configuration inspection CLI commands."""

from __future__ import annotations

import typer

app = typer.Typer()


@app.command()
def show() -> None:
    """Show the effective cache and logging settings."""
    from rich.console import Console
    from rich.table import Table

    from marquee.core.config import get_settings

    settings = get_settings()

    console = Console()
    table = Table(title="Marquee Settings")
    table.add_column("Setting", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Cache max size", str(settings.cache_max_size))
    table.add_row("Cache default TTL", f"{settings.cache_default_ttl:g}s")
    table.add_row("Cleanup interval", f"{settings.cache_cleanup_interval:g}s")
    table.add_row(
        "Stats logging",
        f"every {settings.cache_stats_interval:g}s" if settings.cache_log_stats else "off",
    )
    table.add_row("Log level", settings.log_level)
    table.add_row("Log format", settings.log_format)

    console.print(table)
