"""
Functional options and the logger constructor.

Options are applied left to right to a ``LoggerBuilder``. Same-field options
are last-writer-wins; ``add_caller_skip`` accumulates.

Usage:
    from sugarlog import with_options, format_console, add_caller_skip

    log = with_options(format_console(), add_caller_skip(1))
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from . import default
from .config.encoder import LogConfig, default_config
from .hashing import Hasher
from .logger import Logger, terminate
from .logging.core import NAME_CONTEXT_KEY, BuildError, build

_log = logging.getLogger("sugarlog")


@dataclass
class LoggerBuilder:
    """Mutable state collected from options before the build."""

    format: str | None = None
    caller_skip: int = 0
    hasher: Hasher | None = None
    config: LogConfig | None = None
    replace_globals: bool = False
    name: str | None = None

    def resolve_config(self) -> LogConfig:
        """Explicit config wins outright; otherwise defaults with the requested format."""
        if self.config is not None:
            return self.config
        config = default_config()
        if self.format:
            config = config.model_copy(update={"encoding": self.format})
        return config


Option = Callable[[LoggerBuilder], None]


def format_json() -> Option:
    def apply(builder: LoggerBuilder) -> None:
        builder.format = "json"

    return apply


def format_console() -> Option:
    def apply(builder: LoggerBuilder) -> None:
        builder.format = "console"

    return apply


def add_caller_skip(skip: int) -> Option:
    """Skip ``skip`` more frames when reporting the call site."""
    if skip < 0:
        raise ValueError(f"caller skip must be >= 0, got {skip}")

    def apply(builder: LoggerBuilder) -> None:
        builder.caller_skip += skip

    return apply


def add_hasher(hasher: Hasher) -> Option:
    def apply(builder: LoggerBuilder) -> None:
        builder.hasher = hasher

    return apply


def with_config(config: LogConfig) -> Option:
    """Replace the whole default configuration; format options are then ignored."""

    def apply(builder: LoggerBuilder) -> None:
        builder.config = config

    return apply


def replace_globals() -> Option:
    def apply(builder: LoggerBuilder) -> None:
        builder.replace_globals = True

    return apply


def with_name(name: str) -> Option:
    def apply(builder: LoggerBuilder) -> None:
        builder.name = name

    return apply


def with_options(*options: Option) -> Logger:
    """Build a logger from ``options``.

    A logger that cannot be built (unknown encoding, unopenable output)
    terminates the process with exit status 1.
    """
    builder = LoggerBuilder()
    for option in options:
        option(builder)

    config = builder.resolve_config()
    try:
        bound, sink = build(config, builder.caller_skip)
    except BuildError as exc:
        _log.critical("cannot build logger: %s", exc)
        terminate()

    if builder.name:
        bound = bound.bind(**{NAME_CONTEXT_KEY: builder.name})

    logger = Logger(
        bound=bound,
        sink=sink,
        config=config,
        format=builder.format,
        caller_skip=builder.caller_skip,
        hasher=builder.hasher,
        replace_globals=builder.replace_globals,
        name=builder.name or None,
    )
    if builder.replace_globals:
        default.install(logger)
    return logger
