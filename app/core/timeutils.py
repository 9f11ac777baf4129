"""Clock, timezone and formatting helpers shared by the services."""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Tuple
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Return the configured zone, or ``None`` for system local time."""
    if not name:
        return None
    return ZoneInfo(name)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    A date-only value (``2026-10-20``) is midnight UTC; a date-time
    without an offset is taken to be in system local time.  Raises
    ``ValueError`` on bad input.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        if _is_date_only(value):
            return parsed.replace(tzinfo=timezone.utc)
        parsed = parsed.astimezone()
    return parsed


def _is_date_only(value: str) -> bool:
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _local_midnight(day: date, tz: Optional[tzinfo]) -> datetime:
    if tz is None:
        return datetime.combine(day, time()).astimezone()
    return datetime.combine(day, time(), tzinfo=tz)


def day_window(now: datetime, tz: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    """Return ``[start of today, start of tomorrow)`` around *now* in *tz*.

    Both ends are wall-clock midnights, so the window is 23 or 25 hours
    long on DST change days.
    """
    today = now.astimezone(tz).date()
    return _local_midnight(today, tz), _local_midnight(today + timedelta(days=1), tz)


def format_due_time(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """Format as ``h:mm AM`` on a 12-hour clock, e.g. ``9:05 AM``."""
    local = value.astimezone(tz)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"
