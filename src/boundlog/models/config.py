"""Pydantic configuration models."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from boundlog.core.levels import name_of, rank_of
from boundlog.core.utils import DEFAULT_DATE_FORMAT, validate_date_format

DEFAULT_MAX_FILE_SIZE = 1024 ** 3  # 1 GiB
MIN_FILE_SIZE = 1024


class LoggerConfig(BaseModel):
    """Construction parameters for a Logger."""

    name: str = "boundlog"
    path: str | None = None  # No file sink if omitted
    log_level: str = "INFO"
    command_window_level: str = "INFO"
    date_format: str = DEFAULT_DATE_FORMAT
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    @field_validator("log_level", "command_window_level", mode="before")
    @classmethod
    def canonical_level(cls, value: str | int) -> str:
        return name_of(rank_of(value))

    @field_validator("date_format")
    @classmethod
    def check_date_format(cls, value: str) -> str:
        return validate_date_format(value)

    @field_validator("max_file_size")
    @classmethod
    def apply_floor(cls, value: int) -> int:
        return effective_max_size(value)


def effective_max_size(value: int) -> int:
    """Budgets <= 0 mean unbounded (0); positive budgets are raised to the floor."""
    if value <= 0:
        return 0
    return max(MIN_FILE_SIZE, value)
