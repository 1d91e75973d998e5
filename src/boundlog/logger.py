"""Internal diagnostics for boundlog.

Problems with the log file itself (unopenable paths, failed trims) cannot be
reported through the log file, so they go to a stdlib logger named
``boundlog``. Set ``BOUNDLOG_DEBUG_LOG`` to a path to capture them in a
RotatingFileHandler.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEBUG_LOG_ENV = "BOUNDLOG_DEBUG_LOG"
MAX_BYTES = 1024 * 1024  # 1 MB
BACKUP_COUNT = 2


def get_logger(name: str = "boundlog") -> logging.Logger:
    """Get or create the boundlog diagnostics logger."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    debug_log = os.environ.get(DEBUG_LOG_ENV)
    if not debug_log:
        logger.addHandler(logging.NullHandler())
        return logger

    logger.setLevel(logging.DEBUG)
    log_file = Path(debug_log).expanduser()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


log = get_logger()
