"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.application.dtos.exam import ExamCount, ExamResult, ExamSummary, ExamWrite
    from app.application.dtos.pagination import Page, QuerySpec


# Exam repository interface
class IExamRepository(Protocol):
    """Protocol for exam repository (DIP).

    Filter keys understood by find_page: degree, year, semester, school, room
    (exact match); subject_contains (case-insensitive substring); date_from,
    date_to (inclusive bounds on date). Missing or None filters impose no
    constraint.
    """

    async def get_by_id(self, exam_id: int) -> ExamResult | None:
        """Return exam by ID."""

    async def exists(self, exam_id: int) -> bool:
        """Return True if an exam with this ID exists."""

    async def find_page(self, spec: QuerySpec) -> Page[ExamSummary]:
        """Return one page of exams matching spec.filters, sorted per spec (ties by id)."""

    async def full_text_search(
        self, term: str, page: int, size: int
    ) -> Page[ExamSummary]:
        """Ranked full-text search over subject and degree (date asc, then id)."""

    async def substring_search(
        self, term: str, page: int, size: int
    ) -> Page[ExamSummary]:
        """Case-insensitive substring match on subject or degree (date asc, then id)."""

    async def distinct_values(self, field: str, descending: bool = False) -> list[str]:
        """Return distinct non-null values of field, sorted."""

    async def count_by(self, field: str) -> list[ExamCount]:
        """Return exam counts grouped by field."""

    async def create(self, data: ExamWrite) -> ExamResult:
        """Insert a new exam and return it with its assigned ID."""

    async def update(self, exam_id: int, data: ExamWrite) -> ExamResult | None:
        """Replace all writable fields; None if the exam does not exist."""

    async def delete(self, exam_id: int) -> bool:
        """Delete the exam. Returns False if it did not exist."""

    def after_commit(self, callback: Callable[[], None]) -> None:
        """Run callback after the current write transaction commits."""
