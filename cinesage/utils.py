"""
Miscellaneous utilities.
"""

import re
import time
from functools import wraps
from typing import Callable, Optional

from cinesage.logger import logger

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
SLOW_CALL_MS = 2000.0


def timed(func) -> Callable:
    """Log how long an async call took, also when it raises."""

    @wraps(func)
    async def timed_func(*args, **kwargs):
        init = time.perf_counter()
        outcome = "failed"
        try:
            out = await func(*args, **kwargs)
            outcome = "finished"
            return out
        finally:
            elapsed_ms = 1000 * (time.perf_counter() - init)
            log = logger.warning if elapsed_ms > SLOW_CALL_MS else logger.info
            log(f"{func.__name__} {outcome} in {elapsed_ms:.2f} ms")

    return timed_func


def leading_int(value) -> Optional[int]:
    """Integer prefix of a string, so "2019–2022" gives 2019. None when there is none."""
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return int(match.group(1))
