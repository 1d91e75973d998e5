"""Shared test fixtures for boundlog."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from boundlog.core.logger import Logger


@pytest.fixture
def capture_console():
    """A plain-text Rich console writing into a buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)


@pytest.fixture
def log_path(tmp_path):
    """Log file location inside a directory that does not exist yet."""
    return tmp_path / "logs" / "app.log"


@pytest.fixture
def make_logger(capture_console, log_path):
    """Factory for Loggers wired to the capture console and ``log_path``."""
    created: list[Logger] = []

    def _make(name: str = "test", **kwargs) -> Logger:
        kwargs.setdefault("console", capture_console)
        path = kwargs.pop("path", log_path)
        logger = Logger(name, path, **kwargs)
        created.append(logger)
        return logger

    yield _make

    for logger in created:
        logger.close()


@pytest.fixture
def console_output(capture_console):
    """Callable returning everything written to the capture console so far."""
    return lambda: capture_console.file.getvalue()
