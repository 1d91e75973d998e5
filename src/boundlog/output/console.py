"""Rich console singletons, level theme and the console sink."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from boundlog.core.levels import Level

BOUNDLOG_THEME = Theme({
    "level.all": "default",
    "level.trace": "green",
    "level.debug": "blue",
    "level.info": "default",
    "level.warning": "yellow",
    "level.error": "red",
    "level.critical": "bold red",
    "level.off": "default",
    "header": "bold cyan",
    "status.failed": "bold red",
    "status.success": "bold green",
})

console = Console(theme=BOUNDLOG_THEME, highlight=False, soft_wrap=True)
error_console = Console(stderr=True, theme=BOUNDLOG_THEME, highlight=False, soft_wrap=True)


def level_style(level: Level) -> str:
    """Theme style name for a level, e.g. ``level.warning``."""
    return f"level.{Level(level).name.lower()}"


class ConsoleSink:
    """Writes rendered log lines to a Rich console.

    Rich only emits color when the console is attached to a color-capable
    terminal, so the same call produces plain text when output is redirected.
    """

    def __init__(self, target: Console | None = None):
        self.console = target or console

    @property
    def colored(self) -> bool:
        return self.console.is_terminal and self.console.color_system is not None

    def write(self, level: Level, line: str) -> None:
        style = BOUNDLOG_THEME.styles[level_style(level)]
        self.console.print(Text(line, style=style), end="", soft_wrap=True)
