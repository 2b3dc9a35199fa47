"""
Date-boundary policy for the whole service: UTC.

"today", the current streak, the default query year and the year range all
use UTC calendar days. Stored timestamps are fixed-width UTC strings
(YYYY-MM-DDTHH:MM:SS.ffffffZ), so string comparison in SQL is the same as
chronological comparison and the first ten characters are the UTC date.
Precision stops at the microsecond: timestamps that differ only below that
are stored identically and so share a dedup key.
"""

from datetime import date, datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()


def current_year() -> int:
    return utc_now().year


def format_timestamp(dt: datetime) -> str:
    """Render an aware datetime in the storage format (naive is taken as UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    # strftime does not zero-pad years below 1000 on every platform
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}.{dt.microsecond:06d}Z"
    )


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.rstrip("Z")).replace(tzinfo=timezone.utc)


def year_bounds(year: int) -> tuple[str, str]:
    """Half-open [Jan 1 of year, Jan 1 of year + 1) in the storage format.

    Built as text rather than datetimes so any integer year is accepted;
    years outside 1..9999 simply match nothing. For 9999 the end is
    "9999-13", which sorts after every timestamp in that year.
    """
    start = f"{year:04d}-01-01T00:00:00.000000Z"
    if year >= 9999:
        return start, f"{year:04d}-13"
    return start, f"{year + 1:04d}-01-01T00:00:00.000000Z"


def day_bounds(day: date) -> tuple[str, str]:
    start = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return format_timestamp(start), format_timestamp(start + timedelta(days=1))
