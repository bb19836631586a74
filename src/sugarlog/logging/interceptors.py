"""
Interceptors for capturing standard library and third-party logs.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

from ..config.logging import normalize_level
from .core import LEVEL_VALUES

INTERNAL_LOGGER = "sugarlog"


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging records to the process default logger.

    Records keep their logger name; ``CRITICAL`` is written at error level so
    that a third-party library can never terminate the process.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # The facade's own diagnostics stay on stderr to avoid loops
            if record.name == INTERNAL_LOGGER or record.name.startswith(INTERNAL_LOGGER + "."):
                return

            from ..default import default_logger

            logger = default_logger().named(record.name)
            fields = {}
            if record.exc_info:
                fields["exception"] = logging.Formatter().formatException(record.exc_info)

            msg = record.getMessage()
            if record.levelno >= logging.ERROR:
                logger.errorw(msg, **fields)
            elif record.levelno >= logging.WARNING:
                logger.warnw(msg, **fields)
            elif record.levelno >= logging.INFO:
                logger.infow(msg, **fields)
            else:
                logger.debugw(msg, **fields)
        except Exception:
            self.handleError(record)


def redirect_stdlib(level: str = "info", loggers: Iterable[str] = ()) -> RedirectStdLibHandler:
    """Route stdlib ``logging`` through the default logger.

    Args:
        level: Minimum stdlib level forwarded (debug, info, warn, error, fatal)
        loggers: Named loggers whose own handlers are removed so they propagate to root
    """
    name = normalize_level(level)
    if name not in LEVEL_VALUES:
        raise ValueError(f"unknown level {level!r}")

    handler = RedirectStdLibHandler()
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(LEVEL_VALUES[name])

    for logger_name in loggers:
        lg = logging.getLogger(logger_name)
        lg.handlers = []
        lg.propagate = True

    internal = logging.getLogger(INTERNAL_LOGGER)
    if not internal.handlers:
        internal.addHandler(logging.StreamHandler(sys.stderr))
    internal.propagate = False
    return handler
