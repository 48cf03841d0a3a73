"""Timestamp utilities.

All timestamps handled by shiftledger are UTC and naive, the way the
database stores them.
"""

from datetime import datetime, timedelta, UTC
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def utcnow() -> datetime:
    """Current time in UTC, naive."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """Normalize a datetime to UTC-naive. Naive input is taken as UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def parse_datetime(value: str, now: datetime | None = None) -> datetime:
    """Parse a timestamp string into a UTC-naive datetime.

    Supports:
    - "now", "today" (midnight), "yesterday" (midnight)
    - "this month" (first of the month, midnight)
    - "<N> hours ago", "<N> days ago"
    - Absolute values: "2024-01-15", "2024-01-15 09:30", "2024-01-15T09:30:00Z"

    Args:
        value: Timestamp string
        now: Reference time for relative values (defaults to utcnow())

    Returns:
        UTC-naive datetime

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = value.strip().lower()
    if now is None:
        now = utcnow()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    relative = {
        "now": now,
        "today": midnight,
        "yesterday": midnight - timedelta(days=1),
        "this month": midnight.replace(day=1),
        "last month": midnight.replace(day=1) - relativedelta(months=1),
    }
    if text in relative:
        return relative[text]

    parts = text.split()
    if len(parts) == 3 and parts[2] == "ago" and parts[0].isdigit():
        count = int(parts[0])
        unit = parts[1].rstrip("s")
        if unit == "hour":
            return now - timedelta(hours=count)
        if unit == "day":
            return now - timedelta(days=count)
        if unit == "minute":
            return now - timedelta(minutes=count)

    try:
        parsed = date_parser.parse(value.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse timestamp '{value}': {e}")
    return to_utc_naive(parsed)
