"""UTC time helpers for review scheduling.

Timestamps are stored as UTC ISO strings with second precision and a trailing
'Z' (YYYY-MM-DDTHH:MM:SSZ), which keeps string comparison in queries
chronological.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC 'now'."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_datetime_to_iso_z(utc_now())


def utc_datetime_to_iso_z(dt: datetime) -> str:
    """Format a datetime as UTC ISO string with second precision and trailing 'Z'.

    Naive datetimes are taken to be UTC already.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return dt.replace(microsecond=0).isoformat().replace("+00:00", "Z")


def parse_iso_z(s: str) -> datetime:
    """Parse an ISO-8601 string ending in 'Z' or an offset into an aware UTC datetime."""
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def add_days(dt: datetime, days: int) -> datetime:
    return dt + timedelta(days=days)


def max_days_after(dt: datetime) -> int:
    """Largest whole number of days that can be added to `dt`.

    The result also stays representable once converted to UTC, so it can be
    formatted with `utc_datetime_to_iso_z`.
    """
    days = (datetime.max - dt.replace(tzinfo=None)).days
    if dt.tzinfo is None:
        return days
    as_utc = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return min(days, (datetime.max - as_utc).days)


def add_days_iso(dt: datetime, days: int) -> str:
    return utc_datetime_to_iso_z(add_days(dt, days))


def start_of_utc_day(dt: datetime) -> datetime:
    """Midnight (UTC) of the day `dt` falls on."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
