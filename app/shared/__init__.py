"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import ensure_utc, from_timestamp_utc, start_of_utc_day, utc_now

__all__ = [
    "ensure_utc",
    "from_timestamp_utc",
    "start_of_utc_day",
    "utc_now",
]
