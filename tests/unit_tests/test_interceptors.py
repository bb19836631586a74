"""
Stdlib logging redirection.
"""

import inspect
import logging

import pytest

from sugarlog.logging import redirect_stdlib
from sugarlog.options import replace_globals, with_config, with_options


@pytest.fixture
def redirected(file_config, restore_stdlib_logging):
    with_options(with_config(file_config), replace_globals())
    return redirect_stdlib(level="debug", loggers=["thirdparty"])


def test_records_forwarded_with_name_and_caller(redirected, records):
    line = inspect.currentframe().f_lineno + 1
    logging.getLogger("thirdparty.db").warning("slow %s", "query")

    record = records()[0]
    assert record["logger"] == "thirdparty.db"
    assert (record["level"], record["msg"]) == ("warn", "slow query")
    assert record["caller"].endswith(f"test_interceptors.py:{line}")


def test_levels_mapped(redirected, records):
    lg = logging.getLogger("thirdparty")
    lg.debug("d")
    lg.info("i")
    lg.error("e")
    lg.critical("c")

    assert [r["level"] for r in records()] == ["debug", "info", "error", "error"]


def test_exception_text_bound(redirected, records):
    try:
        raise ValueError("boom")
    except ValueError:
        logging.getLogger("thirdparty").exception("failed")

    record = records()[0]
    assert record["level"] == "error"
    assert "ValueError: boom" in record["exception"]


def test_named_logger_handlers_removed(redirected):
    assert logging.getLogger("thirdparty").handlers == []
    assert redirected in logging.getLogger().handlers


def test_internal_logger_not_forwarded(redirected, records):
    logging.getLogger("sugarlog").warning("internal")
    assert records() == []
    assert logging.getLogger("sugarlog").propagate is False


def test_unknown_level(restore_stdlib_logging):
    with pytest.raises(ValueError):
        redirect_stdlib(level="loud")
