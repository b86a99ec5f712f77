from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """
    Serializes datetime to ISO-8601 with trailing 'Z'.
    If dt is naive, it is treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt_utc.isoformat().replace("+00:00", "Z")


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def week_range(now: datetime, offset: int = 0) -> tuple[datetime, datetime]:
    """
    Monday-start week containing now shifted by offset weeks.

    Returns (start, end) where end is the last microsecond of Sunday.
    """
    shifted = now + timedelta(days=offset * 7)
    start = start_of_day(shifted - timedelta(days=shifted.weekday()))
    end = start + timedelta(days=7) - timedelta(microseconds=1)
    return start, end


def current_week_since_sunday(now: datetime) -> tuple[datetime, datetime]:
    """From last Sunday 00:00 up to now."""
    days_since_sunday = (now.weekday() + 1) % 7
    return start_of_day(now - timedelta(days=days_since_sunday)), now


def previous_month_range(now: datetime) -> tuple[datetime, datetime]:
    """First instant of the previous month to the last microsecond of it."""
    first_of_this_month = start_of_day(now.replace(day=1))
    end = first_of_this_month - timedelta(microseconds=1)
    start = start_of_day(end.replace(day=1))
    return start, end


def millis_id(prefix: str, now: Optional[datetime] = None) -> str:
    """Timestamp id in the style used by batches and waste records, e.g. B1721249501000."""
    now = now or utcnow()
    millis = int(now.replace(tzinfo=timezone.utc).timestamp() * 1000)
    return f"{prefix}{millis}"
