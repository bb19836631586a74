"""
The process-wide default logger and the free functions bound to it.

Lifecycle: the default is built lazily on first use with
``with_options(replace_globals())`` and replaced by every later build that
requests ``replace_globals()``. Replacement swaps a single reference under a
lock; callers on other threads observe either the old or the new logger,
never a mix. Loggers derived before a replacement keep their original sink.
"""

from __future__ import annotations

import threading
from typing import Any, NoReturn

from .logger import Logger

_lock = threading.RLock()
_default: Logger | None = None


def install(logger: Logger) -> None:
    """Make ``logger`` the process-wide default (last write wins)."""
    global _default
    with _lock:
        _default = logger


def default_logger() -> Logger:
    """Return the current default, building it on first use."""
    logger = _default
    if logger is not None:
        return logger
    with _lock:
        if _default is None:
            # local import: options installs through this module
            from .options import replace_globals, with_options

            with_options(replace_globals())
        return _default


def json_global_logger() -> Logger:
    """Rebuild the default logger with JSON encoding."""
    from .options import format_json, replace_globals, with_options

    return with_options(replace_globals(), format_json())


def console_global_logger() -> Logger:
    """Rebuild the default logger with console encoding."""
    from .options import format_console, replace_globals, with_options

    return with_options(replace_globals(), format_console())


# =============================================================================
# Derivation
# =============================================================================


def with_field(key: str, value: Any) -> Logger:
    return default_logger().with_field(key, value)


def with_hashed_field(key: str, value: Any) -> Logger:
    return default_logger().with_hashed_field(key, value)


def kind(value: Any) -> Logger:
    return default_logger().kind(value)


def named(name: str) -> Logger:
    return default_logger().named(name)


def sync() -> None:
    default_logger().sync()


# =============================================================================
# Level functions
# =============================================================================


def debug(*args: Any) -> None:
    default_logger().debug(*args)


def info(*args: Any) -> None:
    default_logger().info(*args)


def warn(*args: Any) -> None:
    default_logger().warn(*args)


def error(*args: Any) -> None:
    default_logger().error(*args)


def fatal(*args: Any) -> NoReturn:
    default_logger().fatal(*args)


def debugf(template: str, *args: Any) -> None:
    default_logger().debugf(template, *args)


def infof(template: str, *args: Any) -> None:
    default_logger().infof(template, *args)


def warnf(template: str, *args: Any) -> None:
    default_logger().warnf(template, *args)


def errorf(template: str, *args: Any) -> None:
    default_logger().errorf(template, *args)


def fatalf(template: str, *args: Any) -> NoReturn:
    default_logger().fatalf(template, *args)


def debugw(msg: str, *keys_and_values: Any, **fields: Any) -> None:
    default_logger().debugw(msg, *keys_and_values, **fields)


def infow(msg: str, *keys_and_values: Any, **fields: Any) -> None:
    default_logger().infow(msg, *keys_and_values, **fields)


def warnw(msg: str, *keys_and_values: Any, **fields: Any) -> None:
    default_logger().warnw(msg, *keys_and_values, **fields)


def errorw(msg: str, *keys_and_values: Any, **fields: Any) -> None:
    default_logger().errorw(msg, *keys_and_values, **fields)


def fatalw(msg: str, *keys_and_values: Any, **fields: Any) -> NoReturn:
    default_logger().fatalw(msg, *keys_and_values, **fields)
