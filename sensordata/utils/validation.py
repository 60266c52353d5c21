"""
Input coercion for reading queries.
"""

from typing import Any

MAX_RECENT_LIMIT = 100

# chip ids are stored in a signed 64-bit INTEGER column
MIN_CHIP_ID = 0
MAX_CHIP_ID = 2**63 - 1


def coerce_limit(limit: Any) -> int:
    """
    Turn a requested row limit into a usable one.

    Missing, zero, negative and non-numeric values fall back to 1. Numeric
    strings and floats are truncated, and anything above MAX_RECENT_LIMIT
    is clamped.

    Examples:
        coerce_limit(None)   -> 1
        coerce_limit("abc")  -> 1
        coerce_limit("7")    -> 7
        coerce_limit(2.9)    -> 2
        coerce_limit(500)    -> 100
    """
    if limit is None or isinstance(limit, bool):
        return 1
    try:
        value = int(float(limit))
    except (TypeError, ValueError, OverflowError):
        return 1
    if value < 1:
        return 1
    return min(value, MAX_RECENT_LIMIT)
