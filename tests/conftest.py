import logging
from pathlib import Path

import orjson
import pytest

from sugarlog import default, hashing
from sugarlog import logger as logger_module
from sugarlog.config import LogConfig
from sugarlog.logging.interceptors import RedirectStdLibHandler


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """
    Every test starts without a default logger or global hasher.
    """
    monkeypatch.setattr(default, "_default", None)
    monkeypatch.setattr(hashing, "_global_hasher", None)
    monkeypatch.setattr(logger_module, "_missing_hasher_reported", False)
    yield


@pytest.fixture
def restore_stdlib_logging():
    """Undo ``redirect_stdlib``: drop its root handler and restore levels and the internal logger."""
    root = logging.getLogger()
    internal = logging.getLogger("sugarlog")
    saved = (root.level, list(internal.handlers), internal.propagate)
    yield
    root.handlers = [h for h in root.handlers if not isinstance(h, RedirectStdLibHandler)]
    root.setLevel(saved[0])
    internal.handlers, internal.propagate = saved[1], saved[2]


def read_records(path: Path) -> list[dict]:
    if not path.exists():
        return []
    return [orjson.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


@pytest.fixture
def log_path(tmp_path) -> Path:
    return tmp_path / "out.log"


@pytest.fixture
def file_config(log_path) -> LogConfig:
    """Default configuration writing to a temporary file instead of stdout."""
    return LogConfig(output_paths=[str(log_path)])


@pytest.fixture
def records(log_path):
    """Callable returning the JSON records written to ``log_path`` so far."""
    return lambda: read_records(log_path)


@pytest.fixture
def read_log():
    """``read_records`` for tests that write to more than one file."""
    return read_records
