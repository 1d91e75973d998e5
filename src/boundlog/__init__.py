"""boundlog: leveled logging to the console and a size-bounded file."""

from boundlog.core.formatter import DeferredMessage, LiteralMessage, MessageFormatter, MessageSource
from boundlog.core.levels import REGISTRY, Level, LevelRegistry, name_of, rank_of
from boundlog.core.logger import Logger
from boundlog.exceptions import (
    BoundlogError,
    ConfigError,
    FileUnavailableError,
    InvalidFormatError,
    InvalidLevelError,
    RotationFailureError,
)

__version__ = "0.1.0"

__all__ = [
    "Logger",
    "Level",
    "LevelRegistry",
    "REGISTRY",
    "rank_of",
    "name_of",
    "MessageFormatter",
    "MessageSource",
    "LiteralMessage",
    "DeferredMessage",
    "BoundlogError",
    "ConfigError",
    "FileUnavailableError",
    "InvalidFormatError",
    "InvalidLevelError",
    "RotationFailureError",
    "__version__",
]
