"""Exam operations: get, create, update, delete (delegate to IExamRepository)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from app.application.dtos.exam import ExamResult, ExamWrite
    from app.application.interfaces.repositories import IExamRepository
    from app.application.interfaces.services import IQueryCache

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("subject", "degree", "year", "semester", "school")


def _validate_write(data: ExamWrite) -> None:
    """Raise ValidationException when a required text field is blank."""
    for field in _REQUIRED_FIELDS:
        value = getattr(data, field)
        if value is None or not str(value).strip():
            raise ValidationException(f"{field} must not be blank", field=field)


class ExamService:
    """Single-exam lookup and writes (last writer wins).

    Once a write commits every cache tier is cleared when
    invalidate_on_write is set; otherwise cached listings stay stale for
    at most their tier's TTL.
    """

    def __init__(
        self,
        exam_repo: IExamRepository,
        cache: IQueryCache | None = None,
        invalidate_on_write: bool = True,
    ) -> None:
        self.exam_repo = exam_repo
        self.cache = cache
        self.invalidate_on_write = invalidate_on_write

    def _after_write(self, action: str, exam_id: int) -> None:
        logger.info("Exam %s: id=%s", action, exam_id)
        if self.cache is not None and self.invalidate_on_write:
            self.exam_repo.after_commit(self.cache.clear)

    async def exists(self, exam_id: int) -> bool:
        """Return True if the exam exists."""
        return await self.exam_repo.exists(exam_id)

    @traced("exam.get")
    async def get_exam(self, exam_id: int) -> ExamResult:
        """Return the exam; raise ResourceNotFoundException when absent."""
        exam = await self.exam_repo.get_by_id(exam_id)
        if exam is None:
            raise ResourceNotFoundException("exam", exam_id)
        return exam

    @traced("exam.create")
    async def create_exam(self, data: ExamWrite) -> ExamResult:
        """Create an exam and return it with its assigned ID."""
        _validate_write(data)
        exam = await self.exam_repo.create(data)
        self._after_write("created", exam.id)
        return exam

    @traced("exam.update")
    async def update_exam(self, exam_id: int, data: ExamWrite) -> ExamResult:
        """Replace every writable field of the exam.

        Raises:
            ResourceNotFoundException: no exam with exam_id.
        """
        _validate_write(data)
        exam = await self.exam_repo.update(exam_id, data)
        if exam is None:
            raise ResourceNotFoundException("exam", exam_id)
        self._after_write("updated", exam_id)
        return exam

    @traced("exam.delete")
    async def delete_exam(self, exam_id: int) -> None:
        """Delete the exam.

        Raises:
            ResourceNotFoundException: no exam with exam_id.
        """
        if not await self.exam_repo.delete(exam_id):
            raise ResourceNotFoundException("exam", exam_id)
        self._after_write("deleted", exam_id)
