"""Date manipulation utilities"""

from datetime import date, datetime, time, timezone


def as_utc(value: date | datetime) -> datetime:
    """Normalise a date or datetime to an aware UTC datetime.

    Plain dates become UTC midnight; naive datetimes are assumed to be UTC.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def window_fraction(start: date | datetime, end: date | datetime, now: date | datetime) -> float:
    """Fraction of the [start, end] window elapsed at `now` (not clamped)"""
    start_utc = as_utc(start)
    total_seconds = (as_utc(end) - start_utc).total_seconds()
    elapsed_seconds = (as_utc(now) - start_utc).total_seconds()
    return elapsed_seconds / total_seconds
