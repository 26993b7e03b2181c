import asyncio

import pytest

from cinesage.logger import get_logger, resolve_log_level
from cinesage.utils import leading_int, timed


def test_leading_int():
    assert leading_int("2019–2022") == 2019
    assert leading_int(" 1999") == 1999
    assert leading_int("N/A") is None
    assert leading_int(None) is None
    assert leading_int(2004) == 2004


def test_timed_keeps_result_and_errors():
    @timed
    async def double(x):
        return 2 * x

    @timed
    async def broken():
        raise KeyError("boom")

    assert asyncio.run(double(21)) == 42
    assert double.__name__ == "double"
    with pytest.raises(KeyError):
        asyncio.run(broken())


def test_resolve_log_level():
    assert resolve_log_level({}) == "INFO"
    assert resolve_log_level({"DEBUG": "1"}) == "DEBUG"
    assert resolve_log_level({"DEBUG": "1", "LOG_LEVEL": "warning"}) == "WARNING"


def test_module_loggers_live_under_package_logger():
    assert get_logger("cinesage.upstream.omdb").name == "cinesage.upstream.omdb"
    assert get_logger("scripts.check").name == "cinesage.scripts.check"
