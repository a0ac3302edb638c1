"""
Time helpers.

All timestamps are stored as naive UTC datetimes.
"""

import calendar
import time
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def struct_time_to_datetime(value: Optional[time.struct_time]) -> Optional[datetime]:
    """Convert a UTC ``struct_time`` (as produced by feedparser) to a naive UTC datetime.

    Args:
        value: Parsed time tuple or None

    Returns:
        datetime or None if the value is missing or out of range
    """
    if not value:
        return None

    try:
        return datetime.fromtimestamp(calendar.timegm(value), tz=timezone.utc).replace(tzinfo=None)
    except (OverflowError, ValueError, TypeError):
        return None
