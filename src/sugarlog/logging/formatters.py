"""
Record encoders (final structlog processors) and color utilities.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from typing import Any

import orjson
from structlog.typing import EventDict, WrappedLogger

from ..config.encoder import DurationEncoding, EncoderConfig

# =============================================================================
# Colors
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "debug": "\033[35m",
    "info": "\033[34m",
    "warn": "\033[33m",
    "error": "\033[31m",
    "fatal": "\033[1;31m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


# =============================================================================
# JSON Serialization
# =============================================================================

_ORJSON_OPTIONS = orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC | orjson.OPT_NON_STR_KEYS


def encode_duration(value: timedelta, encoding: DurationEncoding) -> Any:
    if encoding == "seconds":
        return value.total_seconds()
    if encoding == "millis":
        return value.total_seconds() * 1000
    if encoding == "nanos":
        return value // timedelta(microseconds=1) * 1000
    return str(value)


def make_default(encoding: DurationEncoding) -> Callable[[Any], Any]:
    """orjson ``default`` hook for values it cannot serialize natively."""

    def default(value: Any) -> Any:
        if isinstance(value, timedelta):
            return encode_duration(value, encoding)
        if isinstance(value, (set, frozenset, tuple)):
            return list(value)
        return str(value)

    return default


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=_ORJSON_OPTIONS).decode()


# =============================================================================
# Encoders
# =============================================================================


class _Encoder:
    head_order: tuple[str, ...] = ()

    def __init__(self, encoder: EncoderConfig):
        self._config = encoder
        self._default = make_default(encoder.encode_duration)
        keys = {
            "level": encoder.level_key,
            "time": encoder.time_key,
            "name": encoder.name_key,
            "caller": encoder.caller_key,
            "function": encoder.function_key,
            "message": encoder.message_key,
        }
        self._head = [keys[k] for k in self.head_order if keys[k]]
        self._stacktrace_key = encoder.stacktrace_key


class JSONEncoder(_Encoder):
    """Render a record as a single JSON object.

    Key order: level, time, logger, caller, function, msg, fields, stacktrace.
    """

    head_order = ("level", "time", "name", "caller", "function", "message")

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        ordered = {k: event_dict.pop(k) for k in self._head if k in event_dict}
        stack = event_dict.pop(self._stacktrace_key, None) if self._stacktrace_key else None
        ordered.update(event_dict)
        if stack is not None:
            ordered[self._stacktrace_key] = stack
        return orjson_dumps(ordered, default=self._default) + self._config.line_ending


class ConsoleEncoder(_Encoder):
    """Render a record as separator-delimited text.

    Layout: time, level, logger, caller, function, msg, then the remaining
    fields as one JSON object, then the stack trace on the following lines.
    """

    head_order = ("time", "level", "name", "caller", "function", "message")

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        parts = [str(event_dict.pop(k)) for k in self._head if k in event_dict]
        stack = event_dict.pop(self._stacktrace_key, None) if self._stacktrace_key else None
        if event_dict:
            parts.append(orjson_dumps(event_dict, default=self._default))
        line = self._config.console_separator.join(parts)
        if stack:
            line = f"{line}\n{stack}"
        return line + self._config.line_ending


ENCODERS: dict[str, type[_Encoder]] = {
    "json": JSONEncoder,
    "console": ConsoleEncoder,
}
