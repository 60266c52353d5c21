"""
Timestamp helpers.

Readings are stored with naive UTC timestamps so that comparisons behave the
same on SQLite (which drops tzinfo) and on server databases.
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a caller supplied datetime for comparison with stored values.

    Aware datetimes are converted to UTC and stripped of tzinfo; naive ones
    are assumed to already be UTC.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
