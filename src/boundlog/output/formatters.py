"""Rich table renderers for multi-row messages and the CLI."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from boundlog.core.levels import LevelRegistry
from boundlog.output.console import level_style

_CAPTURE_WIDTH = 10_000


def render_rows(rows: Sequence[Sequence[object]]) -> str:
    """Render a matrix of values as column-aligned plain text, one row per line."""
    width = max((len(row) for row in rows), default=0)
    if width == 0:
        return ""

    table = Table(box=None, show_header=False, show_edge=False, pad_edge=False, padding=(0, 2))
    for _ in range(width):
        table.add_column(no_wrap=True)
    for row in rows:
        cells = [Text(str(cell)) for cell in row]
        cells += [Text("")] * (width - len(cells))
        table.add_row(*cells)

    capture = Console(width=_CAPTURE_WIDTH, color_system=None, highlight=False)
    with capture.capture() as captured:
        capture.print(table)
    lines = [line.rstrip() for line in captured.get().splitlines()]
    return "\n".join(lines).strip("\n")


def format_levels_table(registry: LevelRegistry, console: Console) -> None:
    """Display every level's rank and name in a Rich table."""
    table = Table(title="Levels", show_header=True, header_style="bold")
    table.add_column("Rank", justify="right", width=6)
    table.add_column("Name", width=10)

    for level in registry.ranks():
        table.add_row(str(int(level)), Text(level.name, style=level_style(level)))

    console.print(table)
