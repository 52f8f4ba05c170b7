"""Shared utilities: UTC datetime helpers."""

from app.shared.utils.datetime import (
    ensure_utc,
    from_timestamp_utc,
    start_of_utc_day,
    utc_now,
)

__all__ = [
    "ensure_utc",
    "from_timestamp_utc",
    "start_of_utc_day",
    "utc_now",
]
