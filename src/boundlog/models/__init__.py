"""Data models for boundlog."""

from boundlog.models.config import LoggerConfig
from boundlog.models.record import LogRecord

__all__ = ["LoggerConfig", "LogRecord"]
