"""Exam repository. Returns application DTOs (ExamSummary, ExamResult, Page)."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from sqlalchemy import Select, cast, func, literal, or_, select
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.exam import ExamCount, ExamResult, ExamSummary, ExamWrite
from app.application.dtos.pagination import Page, QuerySpec
from app.core.constants import (
    DESCENDING_REFERENCE_FIELDS,
    REFERENCE_FIELDS,
    SORTABLE_FIELDS,
)
from app.domain.enums import SortDirection
from app.infrastructure.persistence.models.exam import Exam
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc

_EXACT_FILTERS = frozenset({"degree", "year", "semester", "school", "room"})


def escape_like(term: str) -> str:
    """Escape LIKE wildcards % and _ (and the escape char) so term is literal."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _exam_to_summary(e: Exam) -> ExamSummary:
    """Map ORM Exam to the list-view read-model."""
    return ExamSummary(
        id=e.id,
        subject=e.subject,
        degree=e.degree,
        date=ensure_utc(e.date),
        room=e.room,
    )


def _exam_to_result(e: Exam) -> ExamResult:
    """Map ORM Exam to the full read-model."""
    return ExamResult(
        id=e.id,
        subject=e.subject,
        degree=e.degree,
        year=e.year,
        semester=e.semester,
        date=ensure_utc(e.date),
        room=e.room,
        school=e.school,
    )


class ExamRepository(BaseRepository[Exam]):
    """Exam repository: filtered pages, search, reference values, and writes."""

    def __init__(self, db: AsyncSession, fulltext_config: str = "spanish") -> None:
        super().__init__(db, Exam)
        self._fulltext_config = fulltext_config

    # ---- Reads ----

    async def get_by_id(self, exam_id: int) -> ExamResult | None:
        orm = await super().get_by_id(exam_id)
        return _exam_to_result(orm) if orm else None

    async def exists(self, exam_id: int) -> bool:
        async with self._translate_errors("exists"):
            result = await self.db.execute(select(Exam.id).where(Exam.id == exam_id))
            return result.scalar_one_or_none() is not None

    def _apply_filters(self, stmt: Select[Any], filters: dict[str, Any]) -> Select[Any]:
        for field, value in filters.items():
            if value is None:
                continue
            if field in _EXACT_FILTERS:
                stmt = stmt.where(getattr(Exam, field) == value)
            elif field == "subject_contains":
                stmt = stmt.where(
                    Exam.subject.ilike(f"%{escape_like(value)}%", escape="\\")
                )
            elif field == "date_from":
                stmt = stmt.where(Exam.date >= value)
            elif field == "date_to":
                stmt = stmt.where(Exam.date <= value)
            else:
                raise ValueError(f"Unsupported exam filter: {field!r}")
        return stmt

    async def find_page(self, spec: QuerySpec) -> Page[ExamSummary]:
        """Return one page of exams matching spec.filters, sorted per spec (ties by id)."""
        if spec.sort_field not in SORTABLE_FIELDS:
            raise ValueError(f"Unsupported sort field: {spec.sort_field!r}")
        column = getattr(Exam, spec.sort_field)
        order = column.desc() if spec.sort_direction is SortDirection.DESC else column.asc()
        stmt = self._apply_filters(select(Exam), dict(spec.filters))
        stmt = stmt.order_by(order, Exam.id.asc())
        async with self._translate_errors("find_page"):
            rows, total = await self._paginate(stmt, spec.page, spec.size)
        return Page(
            items=[_exam_to_summary(e) for e in rows],
            page=spec.page,
            size=spec.size,
            total_elements=total,
        )

    async def full_text_search(
        self, term: str, page: int, size: int
    ) -> Page[ExamSummary]:
        """Full-text match of term against subject and degree (accent-insensitive).

        Requires PostgreSQL with the unaccent extension. Any failure rolls the
        session back (so a fallback query can run on it) and raises
        PersistenceException.
        """
        config = cast(literal(self._fulltext_config), REGCONFIG)
        document = func.coalesce(Exam.subject, "") + " " + func.coalesce(Exam.degree, "")
        match = func.to_tsvector(config, func.unaccent(document)).bool_op("@@")(
            func.plainto_tsquery(config, func.unaccent(term))
        )
        stmt = select(Exam).where(match).order_by(Exam.date.asc(), Exam.id.asc())
        async with self._translate_errors("full_text_search", rollback=True):
            rows, total = await self._paginate(stmt, page, size)
        return Page(
            items=[_exam_to_summary(e) for e in rows],
            page=page,
            size=size,
            total_elements=total,
        )

    async def substring_search(
        self, term: str, page: int, size: int
    ) -> Page[ExamSummary]:
        """Case-insensitive substring match on subject OR degree (date asc, then id)."""
        pattern = f"%{escape_like(term)}%"
        stmt = (
            select(Exam)
            .where(
                or_(
                    Exam.subject.ilike(pattern, escape="\\"),
                    Exam.degree.ilike(pattern, escape="\\"),
                )
            )
            .order_by(Exam.date.asc(), Exam.id.asc())
        )
        async with self._translate_errors("substring_search"):
            rows, total = await self._paginate(stmt, page, size)
        return Page(
            items=[_exam_to_summary(e) for e in rows],
            page=page,
            size=size,
            total_elements=total,
        )

    async def distinct_values(self, field: str, descending: bool = False) -> list[str]:
        """Return distinct non-null values of field (lexical order)."""
        if field not in REFERENCE_FIELDS:
            raise ValueError(f"Unsupported reference field: {field!r}")
        column = getattr(Exam, field)
        stmt = (
            select(column)
            .distinct()
            .where(column.is_not(None))
            .order_by(column.desc() if descending else column.asc())
        )
        async with self._translate_errors("distinct_values"):
            result = await self.db.execute(stmt)
            return [str(v) for v in result.scalars().all()]

    async def count_by(self, field: str) -> list[ExamCount]:
        """Exam counts per value of field.

        Year groups are ordered by year descending; every other field by
        count descending, then value ascending.
        """
        if field not in REFERENCE_FIELDS:
            raise ValueError(f"Unsupported grouping field: {field!r}")
        column = getattr(Exam, field)
        count = func.count(Exam.id).label("count")
        stmt = select(column, count).where(column.is_not(None)).group_by(column)
        if field in DESCENDING_REFERENCE_FIELDS:
            stmt = stmt.order_by(column.desc())
        else:
            stmt = stmt.order_by(count.desc(), column.asc())
        async with self._translate_errors("count_by"):
            result = await self.db.execute(stmt)
            return [ExamCount(value=str(v), count=int(c)) for v, c in result.all()]

    # ---- Writes ----

    async def create(self, data: ExamWrite) -> ExamResult:
        """Insert a new exam and return it with its assigned ID."""
        orm = await super().create(Exam(**asdict(data)))
        return _exam_to_result(orm)

    async def update(self, exam_id: int, data: ExamWrite) -> ExamResult | None:
        """Replace all writable fields (last writer wins); None if missing."""
        orm = await super().get_by_id(exam_id)
        if orm is None:
            return None
        async with self._translate_errors("update"):
            for field, value in asdict(data).items():
                setattr(orm, field, value)
            await self.db.flush()
            await self.db.refresh(orm)
        return _exam_to_result(orm)

    async def delete(self, exam_id: int) -> bool:
        """Delete the exam. Returns False if it did not exist."""
        orm = await super().get_by_id(exam_id)
        if orm is None:
            return False
        await super().delete(orm)
        return True
