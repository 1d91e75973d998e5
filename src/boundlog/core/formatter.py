"""Message formatting: lazy producers, printf arguments and line flattening.

Every message ends up as exactly one physical line, because the bounded log
file trims by lines. Multi-row values are the single exception: they are
rendered as an indented block that starts on a fresh line.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Protocol, runtime_checkable

from boundlog.logger import log
from boundlog.output.formatters import render_rows

_TRAILING_BREAKS = re.compile(r"[\r\n]+\Z")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

MULTI_ROW_PREFIX = "\n "


@runtime_checkable
class MessageSource(Protocol):
    """Anything that can produce the message value on demand."""

    def resolve(self) -> Any:
        ...


class LiteralMessage:
    """A message value that is already known."""

    def __init__(self, value: Any):
        self.value = value

    def resolve(self) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"LiteralMessage({self.value!r})"


class DeferredMessage:
    """A message built by a zero-argument producer, invoked at most once."""

    _UNSET = object()

    def __init__(self, producer: Callable[[], Any]):
        self.producer = producer
        self._value: Any = self._UNSET

    def resolve(self) -> Any:
        if self._value is self._UNSET:
            self._value = self.producer()
        return self._value

    def __repr__(self) -> str:
        return f"DeferredMessage({self.producer!r})"


def as_message_source(source: Any) -> MessageSource:
    """Wrap a raw message, callable or MessageSource into a MessageSource."""
    if isinstance(source, (LiteralMessage, DeferredMessage)):
        return source
    if isinstance(source, str):
        return LiteralMessage(source)
    if callable(source):
        return DeferredMessage(source)
    if isinstance(source, MessageSource):
        return source
    return LiteralMessage(source)


def is_multi_row(value: Any) -> bool:
    """True for a list/tuple of two or more list/tuple rows."""
    return (
        isinstance(value, (list, tuple))
        and len(value) > 1
        and all(isinstance(row, (list, tuple)) for row in value)
    )


def flatten_text(text: str) -> str:
    """Strip trailing line breaks and turn the remaining ones into ';'."""
    text = _TRAILING_BREAKS.sub("", text)
    return _LINE_BREAK.sub(";", text)


def substitute(template: Any, args: tuple) -> Any:
    """Apply printf-style substitution, falling back to appending the arguments."""
    try:
        return template % args
    except (TypeError, ValueError, KeyError) as e:
        log.warning("Message %r does not match arguments %r: %s", template, args, e)
        return " ".join([str(template), *(str(a) for a in args)])


class MessageFormatter:
    """Turns a message source plus positional arguments into one log line."""

    def format(self, source: Any, *args: Any) -> str:
        value = as_message_source(source).resolve()

        if args:
            value = substitute(value, args)

        if is_multi_row(value):
            return MULTI_ROW_PREFIX + render_rows(value).replace("\n", "\n ")

        if not isinstance(value, str):
            value = "" if value is None else str(value)
        return flatten_text(value)


_default_formatter = MessageFormatter()


def format_message(source: Any, *args: Any) -> str:
    """Format with the shared MessageFormatter."""
    return _default_formatter.format(source, *args)
