"""Leveled logger writing to a console sink and a size-bounded file sink."""

from __future__ import annotations

import os
from typing import Any

from rich.console import Console

from boundlog.core.bounded_file import BoundedLogFile
from boundlog.core.formatter import MessageFormatter
from boundlog.core.levels import Level, LevelSpec, name_of, rank_of
from boundlog.core.utils import DEFAULT_DATE_FORMAT, caller_label, render_timestamp, validate_date_format
from boundlog.exceptions import FileUnavailableError
from boundlog.logger import log
from boundlog.models.config import DEFAULT_MAX_FILE_SIZE, LoggerConfig, effective_max_size
from boundlog.models.record import LogRecord
from boundlog.output.console import ConsoleSink, error_console


class Logger:
    """Logger with independent console and file thresholds.

    Each sink admits a record when the record's level is at or above the
    sink's threshold. Without a ``path`` the file threshold starts at OFF.
    """

    def __init__(
        self,
        name: str,
        path: str | os.PathLike | None = None,
        *,
        log_level: LevelSpec = Level.INFO,
        command_window_level: LevelSpec = Level.INFO,
        date_format: str = DEFAULT_DATE_FORMAT,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        console: Console | ConsoleSink | None = None,
    ):
        self.name = name
        self.formatter = MessageFormatter()
        self.console = console if isinstance(console, ConsoleSink) else ConsoleSink(console)
        self._file: BoundedLogFile | None = None
        self._max_file_size = effective_max_size(max_file_size)
        self._date_format = validate_date_format(date_format)
        self._console_threshold = rank_of(command_window_level)
        self._file_threshold = Level.OFF
        self._console_failed = False
        file_threshold = rank_of(log_level)

        if path:
            self._file_threshold = file_threshold
            self.set_filename(path)

    @classmethod
    def from_config(cls, config: LoggerConfig, console: Console | ConsoleSink | None = None) -> Logger:
        """Build a Logger from a LoggerConfig."""
        return cls(
            config.name,
            config.path,
            log_level=config.log_level,
            command_window_level=config.command_window_level,
            date_format=config.date_format,
            max_file_size=config.max_file_size,
            console=console,
        )

    # -- thresholds -------------------------------------------------------

    @property
    def console_threshold(self) -> Level:
        return self._console_threshold

    @console_threshold.setter
    def console_threshold(self, level: LevelSpec) -> None:
        self._console_threshold = rank_of(level)

    @property
    def file_threshold(self) -> Level:
        return self._file_threshold

    @file_threshold.setter
    def file_threshold(self, level: LevelSpec) -> None:
        self._file_threshold = rank_of(level)

    command_window_level = console_threshold
    log_level = file_threshold

    def set_console_threshold(self, level: LevelSpec) -> None:
        self.console_threshold = level

    def set_file_threshold(self, level: LevelSpec) -> None:
        self.file_threshold = level

    def ignore_logging(self) -> bool:
        """True when both sinks are OFF, so callers can skip all logging work."""
        return self._console_threshold == Level.OFF and self._file_threshold == Level.OFF

    def admits(self, level: LevelSpec) -> bool:
        """True if at least one sink would receive a record at ``level``."""
        rank = rank_of(level)
        return rank >= self._console_threshold or (rank >= self._file_threshold and self.file_enabled)

    # -- configuration ----------------------------------------------------

    @property
    def date_format(self) -> str:
        return self._date_format

    @date_format.setter
    def date_format(self, fmt: str) -> None:
        self._date_format = validate_date_format(fmt)

    @property
    def path(self) -> str | None:
        return str(self._file.path) if self._file is not None else None

    @property
    def file_enabled(self) -> bool:
        return self._file is not None and self._file.usable

    @property
    def max_file_size(self) -> int:
        return self._max_file_size

    def set_filename(self, path: str | os.PathLike) -> bool:
        """(Re)open the file sink at ``path``.

        On failure the file sink is disabled (threshold OFF) and a warning is
        printed to stderr; nothing is raised.
        """
        try:
            if self._file is None:
                self._file = BoundedLogFile(path, self._max_file_size)
            else:
                self._file.open(path)
        except FileUnavailableError as e:
            log.warning("Problem with log file path: %s", e)
            error_console.print(f"boundlog: problem with log file path: {e}", style="status.failed", markup=False)
            self._disable_file()
            return False
        return True

    def set_max_file_size(self, max_bytes: int) -> None:
        """Set the file byte budget (<= 0 for unbounded, else at least 1024) and trim now."""
        if isinstance(max_bytes, bool) or not isinstance(max_bytes, int):
            raise TypeError(f"max file size must be an integer, got {type(max_bytes).__name__}")
        self._max_file_size = effective_max_size(max_bytes)
        if self._file is not None:
            self._file.max_bytes = self._max_file_size
            self._file.enforce_limit()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Logger({self.name!r}, path={self.path!r}, "
            f"console={self._console_threshold.name}, file={self._file_threshold.name})"
        )

    # -- logging ----------------------------------------------------------

    def trace(self, message: Any, *args: Any) -> None:
        self._log(Level.TRACE, message, args)

    def debug(self, message: Any, *args: Any) -> None:
        self._log(Level.DEBUG, message, args)

    def info(self, message: Any, *args: Any) -> None:
        self._log(Level.INFO, message, args)

    def warn(self, message: Any, *args: Any) -> None:
        self._log(Level.WARNING, message, args)

    warning = warn

    def error(self, message: Any, *args: Any) -> None:
        self._log(Level.ERROR, message, args)

    def critical(self, message: Any, *args: Any) -> None:
        self._log(Level.CRITICAL, message, args)

    def log(self, level: LevelSpec, message: Any, *args: Any) -> None:
        """Log at a level given by name or rank."""
        self._log(level, message, args)

    def emit(self, level: LevelSpec, caller: str, message: Any, *args: Any) -> None:
        """Format ``message`` once and hand it to every sink whose threshold admits ``level``."""
        rank = rank_of(level)
        to_console = rank >= self._console_threshold
        sink = self._file
        to_file = rank >= self._file_threshold and sink is not None and sink.usable
        if not (to_console or to_file):
            return

        record = LogRecord(
            caller=caller or "",
            timestamp=render_timestamp(self._date_format),
            level_name=name_of(rank),
            message=self.formatter.format(message, *args),
        )
        line = record.render()

        if to_console:
            try:
                self.console.write(rank, line)
            except (OSError, ValueError) as e:
                if not self._console_failed:
                    self._console_failed = True
                    log.warning("Console sink for %s failed: %s", self.name, e)

        if to_file and not sink.append(line):
            log.debug("Dropped record for %s: file sink rejected the write", sink.path)

    def _log(self, level: LevelSpec, message: Any, args: tuple) -> None:
        # Caller lookup walks the stack, so only do it for admitted records.
        if not self.admits(level):
            return
        self.emit(level, caller_label(__file__), message, *args)

    def _disable_file(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
        self._file_threshold = Level.OFF

