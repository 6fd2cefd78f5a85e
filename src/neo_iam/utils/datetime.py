"""
DateTime utilities for consistent timezone handling.
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get the current UTC time with timezone awareness.

    Returns:
        datetime: Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes coming back from storage.

    Args:
        dt: Datetime to normalise, may be None

    Returns:
        Timezone-aware datetime in UTC, or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
