"""
Time helpers.
"""
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def elapsed_ms(start: float, end: float) -> int:
    """Convert a ``time.perf_counter`` interval to whole milliseconds."""
    return max(0, int(round((end - start) * 1000)))
