"""
Timezone-aware datetime utilities.

Timestamps are stored in UTC; planning arithmetic happens in the user's
profile timezone.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def get_zone(user_timezone: str) -> ZoneInfo:
    """
    Resolve an IANA timezone name.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return ZoneInfo(user_timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {user_timezone}") from exc


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware and in UTC.

    Args:
        dt: datetime to convert (can be None, naive, or timezone-aware)

    Returns:
        Optional[datetime]: UTC timezone-aware datetime, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def to_local(dt: datetime, tz: ZoneInfo) -> datetime:
    """Convert a datetime to the given zone, treating naive values as UTC."""
    return ensure_utc(dt).astimezone(tz)


def parse_clock_time(value: str) -> time:
    """
    Parse an "HH:MM" clock time.

    Raises:
        ValueError: If the value is not a valid 24h clock time
    """
    parts = value.split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid clock time: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if hours < 0 or hours > 23 or minutes < 0 or minutes > 59:
        raise ValueError(f"Invalid clock time: {value!r}")
    return time(hours, minutes)


def at_clock_time(day: date, value: str, tz: ZoneInfo) -> datetime:
    """Combine a calendar day and an "HH:MM" clock time in the given zone."""
    return datetime.combine(day, parse_clock_time(value), tzinfo=tz)


def start_of_week(now: datetime, tz: ZoneInfo) -> date:
    """
    Get the Monday of the week containing ``now`` in the given zone.

    Example:
        >>> start_of_week(datetime(2026, 10, 22, 8, tzinfo=UTC), ZoneInfo("UTC"))
        date(2026, 10, 19)
    """
    local_day = to_local(now, tz).date()
    return local_day - timedelta(days=local_day.weekday())


def day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Local midnight-to-midnight bounds of a calendar day."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start, end
