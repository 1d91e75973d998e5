"""Custom exception hierarchy for boundlog."""

from __future__ import annotations

from typing import Any


class BoundlogError(Exception):
    """Base exception for all boundlog errors."""


class InvalidLevelError(BoundlogError, ValueError):
    """Raised when a level name or rank cannot be resolved."""

    def __init__(self, level: Any):
        self.level = level
        super().__init__(f"Invalid logging level: {level!r}")


class InvalidFormatError(BoundlogError, ValueError):
    """Raised when a date format pattern cannot render a timestamp."""

    def __init__(self, pattern: Any, reason: str = ""):
        self.pattern = pattern
        self.reason = reason
        msg = f"Invalid date format: {pattern!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class FileUnavailableError(BoundlogError, OSError):
    """The log file could not be opened or reopened.

    Never raised out of a log call; the logger falls back to console-only
    operation and reports this through the diagnostic side channel.
    """

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"Log file '{path}' is unavailable: {reason}" if reason else f"Log file '{path}' is unavailable")


class RotationFailureError(BoundlogError, OSError):
    """Raised when trimming the log file could not rewrite its contents."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not trim log file '{path}': {reason}")


class ConfigError(BoundlogError):
    """Raised when configuration loading or validation fails."""
