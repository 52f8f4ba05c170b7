"""Infrastructure exceptions for persistence operations.

Persistence errors extend ExamCalendarException so presentation can map them
to HTTP responses consistently. They are not retried here; retry policy
belongs to the database driver / pool.
"""

from app.domain.exceptions import ExamCalendarException


class PersistenceException(ExamCalendarException):
    """Data store unavailable or a query failed at the driver level."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Persistence operation failed: {operation}",
            "PERSISTENCE_ERROR",
            {"operation": operation, "reason": reason},
        )
