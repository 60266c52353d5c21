"""
Utility helpers for timestamps and query argument coercion.
"""

from sensordata.utils.timestamps import utcnow, to_naive_utc
from sensordata.utils.validation import coerce_limit, MAX_RECENT_LIMIT, MIN_CHIP_ID, MAX_CHIP_ID

__all__ = [
    "utcnow",
    "to_naive_utc",
    "coerce_limit",
    "MAX_RECENT_LIMIT",
    "MIN_CHIP_ID",
    "MAX_CHIP_ID",
]
