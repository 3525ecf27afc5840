"""Timestamps - UTC normalisation and canonical ISO-8601 serialisation.

Invariants:
    - Naive datetimes are interpreted as UTC (SQLite returns naive values)
    - to_iso_string always emits YYYY-MM-DDTHH:MM:SS.sssZ (millisecond precision)
    - time_range_start returns None for "all" and for unknown ranges
"""

from datetime import datetime, timedelta, timezone

from speechkarma.core.domain_types import TIME_RANGE_DAYS


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values, convert aware values to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 string (or pass a datetime through) into aware UTC.

    Raises ValueError for unparseable strings.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str):
        raise ValueError(f"Unsupported timestamp type: {type(value).__name__}")
    return as_utc(datetime.fromisoformat(value))


def to_iso_string(value: datetime) -> str:
    """Serialise in the canonical form used by every API response."""
    value = as_utc(value)
    # strftime("%Y") does not zero-pad years below 1000 on glibc
    return (
        f"{value.year:04d}-{value:%m-%dT%H:%M:%S}"
        f".{value.microsecond // 1000:03d}Z"
    )


def time_range_start(
    time_range: str, now: datetime | None = None,
) -> datetime | None:
    """Earliest created_at included by a timeline time-range filter."""
    days = TIME_RANGE_DAYS.get(time_range)
    if days is None:
        return None
    return (now or utc_now()) - timedelta(days=days)
