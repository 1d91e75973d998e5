"""Utility functions for boundlog core."""

from __future__ import annotations

import inspect
import re
from datetime import datetime

from boundlog.exceptions import InvalidFormatError

# strftime directives accepted in date formats, plus %L for milliseconds.
STRFTIME_DIRECTIVES = frozenset("aAwdbBmyYHIpMSfzZjUWcxXGuVFTeDRrnthCg%")
MILLISECOND_DIRECTIVE = "L"

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S,%L"

_DIRECTIVE_PATTERN = re.compile(r"%(.?)", re.DOTALL)


def render_timestamp(fmt: str, when: datetime | None = None) -> str:
    """Render ``when`` (default: now) with a strftime pattern that also understands %L."""
    if not isinstance(fmt, str):
        raise InvalidFormatError(fmt, "not a string")
    when = when or datetime.now()

    def _expand(match: re.Match) -> str:
        code = match.group(1)
        if code == MILLISECOND_DIRECTIVE:
            return f"{when.microsecond // 1000:03d}"
        if not code:
            raise InvalidFormatError(fmt, "dangling '%'")
        if code not in STRFTIME_DIRECTIVES:
            raise InvalidFormatError(fmt, f"unknown directive '%{code}'")
        return match.group(0)

    pattern = _DIRECTIVE_PATTERN.sub(_expand, fmt)
    try:
        return when.strftime(pattern)
    except ValueError as e:
        raise InvalidFormatError(fmt, str(e)) from e


def validate_date_format(fmt: str) -> str:
    """Check a date format by rendering the current time with it."""
    render_timestamp(fmt)
    return fmt


def caller_label(skip_file: str) -> str:
    """Return ``module.function`` for the first frame outside ``skip_file``."""
    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        while frame is not None and frame.f_code.co_filename == skip_file:
            frame = frame.f_back
        if frame is None:
            return ""
        module = frame.f_globals.get("__name__", "")
        function = frame.f_code.co_name
        return f"{module}.{function}" if module else function
    finally:
        del frame
