"""
Time handling utilities for trade timestamps.

All timestamps created by the journal are timezone-aware UTC datetimes.
Persisted values are ISO8601 strings, which may carry a trailing "Z".
"""

from datetime import date, datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current wall-clock time as a UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """
    Format a timestamp for persistence.

    Args:
        ts: Timestamp to format

    Returns:
        ISO8601 formatted string
    """
    return ts.isoformat()


def parse_timestamp(value: str) -> datetime:
    """
    Parse a persisted ISO8601 timestamp.

    Naive values are assumed to be UTC. A trailing "Z" is accepted.

    Args:
        value: ISO8601 string

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the string is not a valid timestamp
    """
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    ts = datetime.fromisoformat(text)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def local_date(ts: datetime) -> date:
    """Calendar date of a timestamp in the local timezone."""
    return ts.astimezone().date()


def is_same_day(ts: datetime, reference: Optional[datetime] = None) -> bool:
    """
    Check whether a timestamp falls on the same local calendar day as a reference.

    Args:
        ts: Timestamp to check
        reference: Reference time, defaults to now

    Returns:
        True if both fall on the same local date
    """
    if reference is None:
        reference = utc_now()
    return local_date(ts) == local_date(reference)


def format_time_label(ts: datetime) -> str:
    """Short HH:MM label in local time, used for price history points."""
    return ts.astimezone().strftime("%H:%M")
