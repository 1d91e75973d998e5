"""Transient log record model."""

from __future__ import annotations

from dataclasses import dataclass

LINE_TEMPLATE = "%-s %-23s %-8s %s\n"


@dataclass(frozen=True)
class LogRecord:
    """One log call, alive only long enough to be rendered."""

    caller: str
    timestamp: str
    level_name: str
    message: str

    def render(self) -> str:
        """Render as a single newline-terminated line."""
        return LINE_TEMPLATE % (self.caller, self.timestamp, self.level_name, self.message)
