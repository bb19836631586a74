"""
Sugarlog: a sugared facade over structlog.

Provides a functional-options constructor, a process-wide default logger,
hashed (redacted) fields and module-level mirrors of the level calls.

Usage:
    import sugarlog

    sugarlog.info("service started")
    sugarlog.with_field("request_id", rid).infow("handled", "status", 200)

    log = sugarlog.with_options(sugarlog.format_console(), sugarlog.add_hasher(sugarlog.Sha256Hasher()))
    log.with_hashed_field("email", email).info("signup")
"""

from .config import EncoderConfig, LogConfig
from .default import (
    console_global_logger,
    debug,
    debugf,
    debugw,
    default_logger,
    error,
    errorf,
    errorw,
    fatal,
    fatalf,
    fatalw,
    info,
    infof,
    infow,
    json_global_logger,
    kind,
    named,
    sync,
    warn,
    warnf,
    warnw,
    with_field,
    with_hashed_field,
)
from .hashing import Hasher, HasherError, HmacHasher, Sha256Hasher, get_global_hasher, set_global_hasher
from .logger import Logger
from .logging import redirect_stdlib
from .options import (
    LoggerBuilder,
    Option,
    add_caller_skip,
    add_hasher,
    format_console,
    format_json,
    replace_globals,
    with_config,
    with_name,
    with_options,
)

__all__ = [
    "EncoderConfig",
    "Hasher",
    "HasherError",
    "HmacHasher",
    "LogConfig",
    "Logger",
    "LoggerBuilder",
    "Option",
    "Sha256Hasher",
    "add_caller_skip",
    "add_hasher",
    "console_global_logger",
    "debug",
    "debugf",
    "debugw",
    "default_logger",
    "error",
    "errorf",
    "errorw",
    "fatal",
    "fatalf",
    "fatalw",
    "format_console",
    "format_json",
    "get_global_hasher",
    "info",
    "infof",
    "infow",
    "json_global_logger",
    "kind",
    "named",
    "redirect_stdlib",
    "replace_globals",
    "set_global_hasher",
    "sync",
    "warn",
    "warnf",
    "warnw",
    "with_config",
    "with_field",
    "with_hashed_field",
    "with_name",
    "with_options",
]
