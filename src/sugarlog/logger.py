"""
The Logger facade.

``Logger`` is an immutable value wrapping a structlog filtering bound logger.
Field binding returns a new ``Logger`` sharing the same sink; nothing is ever
written by a derivation.

Each level comes in three call shapes::

    log.info("user", user_id, "logged in")          # args joined with spaces
    log.infof("took %.2fs", elapsed)                 # printf-style template
    log.infow("login", "user", user_id, ok=True)     # key/value pairs
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from dataclasses import dataclass, field, replace
from typing import Any, NoReturn

from structlog.typing import FilteringBoundLogger

from .config.encoder import LogConfig
from .hashing import Hasher, get_global_hasher
from .logging.core import LEVEL_VALUES, METHOD_LEVELS, NAME_CONTEXT_KEY
from .logging.sinks import SinkLogger

_log = logging.getLogger("sugarlog")

_ODD_NUMBER_ERR_MSG = "Ignored key without a value."
_NON_STRING_KEY_ERR_MSG = "Ignored key-value pairs with non-string keys."

_missing_hasher_reported = False


def _report_missing_hasher(key: str) -> None:
    global _missing_hasher_reported
    if not _missing_hasher_reported:
        _missing_hasher_reported = True
        _log.warning("no hasher configured, field %r dropped by with_hashed_field", key)


def _sprint(args: tuple[Any, ...]) -> str:
    return " ".join(str(a) for a in args)


def _sprintf(template: str, args: tuple[Any, ...]) -> str:
    if not args:
        return template
    try:
        return template % args
    except (TypeError, ValueError):
        return f"{template} %!(EXTRA {', '.join(repr(a) for a in args)})"


def terminate() -> NoReturn:
    """Exit the process with status 1.

    On the main thread this raises ``SystemExit``; from any other thread the
    interpreter is stopped with ``os._exit`` after flushing stdio.
    """
    if threading.current_thread() is threading.main_thread():
        sys.exit(1)
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()
    os._exit(1)


@dataclass(frozen=True)
class Logger:
    bound: FilteringBoundLogger
    sink: SinkLogger = field(repr=False)
    config: LogConfig = field(repr=False)
    format: str | None = None
    caller_skip: int = 0
    hasher: Hasher | None = None
    replace_globals: bool = False
    name: str | None = None

    # =========================================================================
    # Derivation
    # =========================================================================

    def with_field(self, key: str, value: Any) -> Logger:
        """Return a copy with ``key=value`` bound to every record."""
        return replace(self, bound=self.bound.bind(**{key: value}))

    def with_hashed_field(self, key: str, value: Any) -> Logger:
        """Bind the hashed form of ``value`` under ``key``.

        Uses this logger's hasher, else the process-wide one. Without any
        hasher the receiver is returned unchanged and a one-time warning goes
        to the ``sugarlog`` stdlib logger.
        """
        hasher = self.hasher if self.hasher is not None else get_global_hasher()
        if hasher is None:
            _report_missing_hasher(key)
            return self
        return self.with_field(key, hasher.hash(value))

    def kind(self, value: Any) -> Logger:
        return self.with_field("kind", value)

    def named(self, name: str) -> Logger:
        """Return a copy whose name is extended by ``name`` (dot separated)."""
        if not name:
            return self
        full = f"{self.name}.{name}" if self.name else name
        return replace(self, bound=self.bound.bind(**{NAME_CONTEXT_KEY: full}), name=full)

    def sync(self) -> None:
        """Flush every output."""
        self.sink.sync()

    # =========================================================================
    # Internals
    # =========================================================================

    def _sweeten(self, keys_and_values: tuple[Any, ...], fields: dict[str, Any]) -> dict[str, Any]:
        swept: dict[str, Any] = {}
        invalid: list[list[Any]] = []
        pairs = len(keys_and_values)
        i = 0
        while i < pairs:
            key = keys_and_values[i]
            if i == pairs - 1:
                self.bound.error(_ODD_NUMBER_ERR_MSG, ignored=key)
                break
            value = keys_and_values[i + 1]
            if isinstance(key, str):
                swept[key] = value
            else:
                invalid.append([key, value])
            i += 2
        if invalid:
            self.bound.error(_NON_STRING_KEY_ERR_MSG, invalid=invalid)
        swept.update(fields)
        return swept

    def _enabled(self, method: str) -> bool:
        return LEVEL_VALUES[METHOD_LEVELS[method]] >= LEVEL_VALUES[self.config.level.value]

    def _logw(self, method: str, msg: str, keys_and_values: tuple[Any, ...], fields: dict[str, Any]) -> None:
        # filtered calls must not emit the key/value anomaly reports either
        if not self._enabled(method):
            return
        swept = self._sweeten(keys_and_values, fields)
        # bound rather than passed as keywords: "event" is a positional parameter of the level methods
        bound = self.bound.bind(**swept) if swept else self.bound
        getattr(bound, method)(msg)

    def _exit(self) -> NoReturn:
        self.sink.sync()
        terminate()

    # =========================================================================
    # Level methods
    # =========================================================================

    def debug(self, *args: Any) -> None:
        self.bound.debug(_sprint(args))

    def info(self, *args: Any) -> None:
        self.bound.info(_sprint(args))

    def warn(self, *args: Any) -> None:
        self.bound.warning(_sprint(args))

    def error(self, *args: Any) -> None:
        self.bound.error(_sprint(args))

    def fatal(self, *args: Any) -> NoReturn:
        self.bound.critical(_sprint(args))
        self._exit()

    def debugf(self, template: str, *args: Any) -> None:
        self.bound.debug(_sprintf(template, args))

    def infof(self, template: str, *args: Any) -> None:
        self.bound.info(_sprintf(template, args))

    def warnf(self, template: str, *args: Any) -> None:
        self.bound.warning(_sprintf(template, args))

    def errorf(self, template: str, *args: Any) -> None:
        self.bound.error(_sprintf(template, args))

    def fatalf(self, template: str, *args: Any) -> NoReturn:
        self.bound.critical(_sprintf(template, args))
        self._exit()

    def debugw(self, msg: str, *keys_and_values: Any, **fields: Any) -> None:
        self._logw("debug", msg, keys_and_values, fields)

    def infow(self, msg: str, *keys_and_values: Any, **fields: Any) -> None:
        self._logw("info", msg, keys_and_values, fields)

    def warnw(self, msg: str, *keys_and_values: Any, **fields: Any) -> None:
        self._logw("warning", msg, keys_and_values, fields)

    def errorw(self, msg: str, *keys_and_values: Any, **fields: Any) -> None:
        self._logw("error", msg, keys_and_values, fields)

    def fatalw(self, msg: str, *keys_and_values: Any, **fields: Any) -> NoReturn:
        self._logw("critical", msg, keys_and_values, fields)
        self._exit()
