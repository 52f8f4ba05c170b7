"""UTC datetime helpers.

Exam dates, token expiry and the "upcoming" cut-off are all compared in
UTC; SQLite hands back naive datetimes, so normalize at the repository
boundary with ensure_utc.
"""

from datetime import UTC, datetime, time


def utc_now() -> datetime:
    """Return the current timezone-aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as UTC-aware (naive values are taken to be UTC).

    Args:
        dt: A datetime that may be naive or aware, or None.

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def from_timestamp_utc(timestamp: float) -> datetime:
    """UTC-aware datetime from a Unix timestamp in seconds (e.g. a JWT exp)."""
    return datetime.fromtimestamp(timestamp, tz=UTC)


def start_of_utc_day(now: datetime | None = None) -> datetime:
    """Midnight UTC of the day containing now (defaults to utc_now())."""
    current = ensure_utc(now) if now is not None else utc_now()
    return datetime.combine(current.date(), time.min, tzinfo=UTC)
