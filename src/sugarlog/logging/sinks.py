"""
Output sinks and the structlog-facing writer that fans records out to them.
"""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO


class SinkOpenError(OSError):
    """An output path could not be opened."""


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @abstractmethod
    def _stream(self) -> IO[str]:
        """Return the stream to write to."""
        ...

    def write(self, line: str) -> None:
        with self._lock:
            stream = self._stream()
            stream.write(line)
            stream.flush()

    def sync(self) -> None:
        with self._lock:
            self._stream().flush()

    def close(self) -> None:
        pass


class StdioSink(BaseSink):
    """Standard stream sink.

    The stream is looked up on every write so that a replaced
    ``sys.stdout`` / ``sys.stderr`` (e.g. under test capture) is honoured.
    """

    def __init__(self, name: str):
        super().__init__()
        self._name = name

    def _stream(self) -> IO[str]:
        return sys.stdout if self._name == "stdout" else sys.stderr

    def __repr__(self) -> str:
        return f"StdioSink({self._name!r})"


class FileSink(BaseSink):
    """Local file sink, opened in append mode."""

    def __init__(self, path: str | Path):
        super().__init__()
        self._path = Path(path)
        try:
            self._file = open(self._path, "a", encoding="utf-8")
        except OSError as exc:
            raise SinkOpenError(f"cannot open output {str(self._path)!r}: {exc}") from exc

    def _stream(self) -> IO[str]:
        return self._file

    def close(self) -> None:
        with self._lock:
            self._file.close()

    def __repr__(self) -> str:
        return f"FileSink({str(self._path)!r})"


def open_sink(path: str) -> BaseSink:
    if path in ("stdout", "stderr"):
        return StdioSink(path)
    return FileSink(path)


def open_sinks(paths: list[str]) -> list[BaseSink]:
    """Open every path; on failure close what was already opened and re-raise."""
    sinks: list[BaseSink] = []
    try:
        for path in paths:
            sinks.append(open_sink(path))
    except SinkOpenError:
        for sink in sinks:
            sink.close()
        raise
    return sinks


# =============================================================================
# Wrapped Logger
# =============================================================================


class SinkLogger:
    """Wrapped logger handed to structlog.

    Receives fully rendered lines and writes them to every output. Write
    failures are reported to the error outputs and never raised.
    """

    def __init__(self, outputs: list[BaseSink], error_outputs: list[BaseSink]):
        self.outputs = outputs
        self.error_outputs = error_outputs

    def msg(self, message: str) -> None:
        for sink in self.outputs:
            try:
                sink.write(message)
            except OSError as exc:
                self._report(f"write error on {sink!r}: {exc}\n")

    debug = info = warning = warn = error = critical = fatal = exception = log = msg

    def _report(self, text: str) -> None:
        for sink in self.error_outputs:
            try:
                sink.write(text)
            except OSError:
                continue

    def sync(self) -> None:
        for sink in self.outputs:
            try:
                sink.sync()
            except OSError as exc:
                self._report(f"sync error on {sink!r}: {exc}\n")
