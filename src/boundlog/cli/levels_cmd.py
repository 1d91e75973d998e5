"""Levels command: boundlog levels."""

from __future__ import annotations

import click

from boundlog.output.console import console


@click.command()
def levels() -> None:
    """Show every severity level and its rank."""
    from boundlog.core.levels import REGISTRY
    from boundlog.output.formatters import format_levels_table

    format_levels_table(REGISTRY, console)
