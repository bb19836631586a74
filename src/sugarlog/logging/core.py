"""
Core pipeline construction: structlog processors and the per-logger build.

Every logger gets its own processor chain and filtering wrapper built from a
``LogConfig``; nothing here touches structlog's global configuration.
"""

from __future__ import annotations

import inspect
import time
import traceback
from datetime import datetime, timezone
from pathlib import Path
from types import FrameType

import structlog
from structlog.typing import EventDict, FilteringBoundLogger, Processor, WrappedLogger

from ..config.encoder import EncoderConfig, LogConfig
from .formatters import ENCODERS, colorize
from .sinks import SinkLogger, SinkOpenError, open_sinks

# =============================================================================
# Levels
# =============================================================================

LEVEL_VALUES = {
    "debug": 10,
    "info": 20,
    "warn": 30,
    "error": 40,
    "fatal": 50,
}

# structlog method name -> emitted level name
METHOD_LEVELS = {
    "debug": "debug",
    "info": "info",
    "warning": "warn",
    "warn": "warn",
    "error": "error",
    "exception": "error",
    "critical": "fatal",
    "fatal": "fatal",
}

NAME_CONTEXT_KEY = "_name"

_INTERNAL_MODULES = ("sugarlog", "structlog", "logging")


class BuildError(RuntimeError):
    """The logger pipeline could not be constructed."""


# =============================================================================
# Structlog Processors
# =============================================================================


class AddLogLevel:
    """Add the level name, encoded per ``encode_level``."""

    def __init__(self, key: str, encoding: str):
        self._key = key
        self._encoding = encoding

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        level = METHOD_LEVELS.get(method_name, method_name)
        text = level.upper() if self._encoding.startswith("capital") else level
        if self._encoding.endswith("_color"):
            text = colorize(text, level)
        event_dict[self._key] = text
        return event_dict


class AddTimestamp:
    """Add the record time, encoded per ``encode_time``."""

    def __init__(self, key: str, encoding: str):
        self._key = key
        self._encoding = encoding

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict[self._key] = self.encode(time.time())
        return event_dict

    def encode(self, ts: float) -> str | float:
        if self._encoding == "epoch":
            return ts
        if self._encoding == "epoch_millis":
            return ts * 1000
        local = datetime.fromtimestamp(ts, timezone.utc).astimezone()
        if self._encoding == "rfc3339":
            return format_rfc3339(local)
        return format_iso8601(local)


def _zone(moment: datetime, sep: str) -> str:
    offset = moment.utcoffset()
    if not offset:
        return "Z"
    zone = moment.strftime("%z")
    return zone[:3] + sep + zone[3:]


def format_iso8601(moment: datetime) -> str:
    """``2024-05-01T12:00:00.000+0200``, with ``Z`` for a zero offset."""
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}" + _zone(moment, "")


def format_rfc3339(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + _zone(moment, ":")


class AddLoggerName:
    """Move the bound logger name to its output key, omitting it when unnamed."""

    def __init__(self, key: str):
        self._key = key

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        name = event_dict.pop(NAME_CONTEXT_KEY, None)
        if name and self._key:
            event_dict[self._key] = name
        return event_dict


class RenameEventKey:
    """Rename structlog's ``event`` to the configured message key; an empty key drops it."""

    def __init__(self, key: str):
        self._key = key

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if "event" in event_dict and self._key != "event":
            event = event_dict.pop("event")
            if self._key:
                event_dict[self._key] = event
        return event_dict


def _is_internal(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    return any(module == name or module.startswith(name + ".") for name in _INTERNAL_MODULES)


def find_caller(skip: int = 0) -> FrameType | None:
    """Return the first frame outside the logging machinery, ``skip`` frames further out."""
    frame = inspect.currentframe()
    while frame is not None and _is_internal(frame):
        frame = frame.f_back
    for _ in range(skip):
        if frame is None:
            break
        frame = frame.f_back
    return frame


class AddCallsite:
    """Add caller location, function name and stack trace of the logging call."""

    def __init__(self, encoder: EncoderConfig, skip: int, with_caller: bool, stack_level: int | None):
        self._encoder = encoder
        self._skip = skip
        self._with_caller = with_caller and bool(encoder.caller_key or encoder.function_key)
        self._stack_level = stack_level if encoder.stacktrace_key else None

    def _wants_stack(self, method_name: str) -> bool:
        if self._stack_level is None:
            return False
        level = METHOD_LEVELS.get(method_name, method_name)
        return LEVEL_VALUES.get(level, 0) >= self._stack_level

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        wants_stack = self._wants_stack(method_name)
        if not (self._with_caller or wants_stack):
            return event_dict

        frame = find_caller(self._skip)
        if frame is None:
            return event_dict

        encoder = self._encoder
        if self._with_caller:
            if encoder.caller_key:
                event_dict[encoder.caller_key] = self.encode_caller(frame)
            if encoder.function_key:
                module = frame.f_globals.get("__name__", "")
                event_dict[encoder.function_key] = f"{module}.{frame.f_code.co_name}"
        if wants_stack:
            event_dict[encoder.stacktrace_key] = "".join(traceback.format_stack(frame)).rstrip("\n")
        return event_dict

    def encode_caller(self, frame: FrameType) -> str:
        filename = frame.f_code.co_filename
        if self._encoder.encode_caller == "short":
            path = Path(filename)
            filename = f"{path.parent.name}/{path.name}" if path.parent.name else path.name
        return f"{filename}:{frame.f_lineno}"


# =============================================================================
# Build
# =============================================================================


def build_processors(config: LogConfig, caller_skip: int = 0) -> list[Processor]:
    encoder_cls = ENCODERS.get(config.encoding)
    if encoder_cls is None:
        raise BuildError(f"no encoder registered for name {config.encoding!r}")

    encoder = config.encoder
    processors: list[Processor] = []
    if encoder.level_key:
        processors.append(AddLogLevel(encoder.level_key, encoder.encode_level))
    if encoder.time_key:
        processors.append(AddTimestamp(encoder.time_key, encoder.encode_time))
    processors.append(AddLoggerName(encoder.name_key))

    stack_level = None if config.disable_stacktrace else LEVEL_VALUES[config.stacktrace_level.value]
    processors.append(AddCallsite(encoder, caller_skip, not config.disable_caller, stack_level))

    processors += [
        RenameEventKey(encoder.message_key),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        encoder_cls(encoder),
    ]
    return processors


def build(config: LogConfig, caller_skip: int = 0) -> tuple[FilteringBoundLogger, SinkLogger]:
    """Construct the bound logger and its sink writer for ``config``.

    Raises:
        BuildError: unknown encoding or an output that cannot be opened.
    """
    processors = build_processors(config, caller_skip)

    try:
        outputs = open_sinks(config.output_paths)
    except SinkOpenError as exc:
        raise BuildError(str(exc)) from exc
    try:
        error_outputs = open_sinks(config.error_output_paths)
    except SinkOpenError as exc:
        for output in outputs:
            output.close()
        raise BuildError(str(exc)) from exc

    sink = SinkLogger(outputs, error_outputs)
    # bind() materializes the lazy proxy into a concrete filtering logger
    bound = structlog.wrap_logger(
        sink,
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LEVEL_VALUES[config.level.value]),
        context_class=dict,
    ).bind(**config.initial_fields)
    return bound, sink
