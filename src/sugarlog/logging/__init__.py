"""
Structured logging pipeline.

Builds one structlog processor chain per logger:
level -> timestamp -> logger name -> callsite -> message key -> encoder,
writing rendered lines to the configured sinks (stdout, stderr, files).

Library: structlog + orjson for JSON serialization.
"""

from .core import BuildError, build, build_processors
from .interceptors import RedirectStdLibHandler, redirect_stdlib
from .sinks import SinkLogger

__all__ = [
    "BuildError",
    "RedirectStdLibHandler",
    "SinkLogger",
    "build",
    "build_processors",
    "redirect_stdlib",
]
