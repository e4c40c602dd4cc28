"""Small helpers for timestamps and identifiers."""

import time


def now_unix_milli() -> int:
    """Return the current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def gen_trade_id() -> str:
    """Return a new trade id built from the current millisecond timestamp."""
    return str(now_unix_milli())