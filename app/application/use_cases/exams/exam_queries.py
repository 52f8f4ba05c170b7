"""Exam queries: paginated listings, multi-criteria filter, search routing,
reference values and counts. Each operation is cached in its tier."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.application.dtos.pagination import QuerySpec
from app.core.cache_keys import counts_key, query_key, reference_key
from app.core.constants import (
    CACHE_PREFIX_BY_CRITERIA,
    CACHE_PREFIX_EXAMS,
    CACHE_TIER_LONG,
    CACHE_TIER_MEDIUM,
    CACHE_TIER_SHORT,
    DEFAULT_SORT_FIELD,
    DESCENDING_REFERENCE_FIELDS,
    REFERENCE_FIELDS,
    SORTABLE_FIELDS,
)
from app.domain.enums import SortDirection
from app.domain.exceptions import ValidationException
from app.shared.telemetry.tracing import traced
from app.shared.utils.datetime import ensure_utc, start_of_utc_day

if TYPE_CHECKING:
    from app.application.dtos.exam import ExamCount, ExamSummary
    from app.application.dtos.pagination import Page
    from app.application.interfaces.repositories import IExamRepository
    from app.application.interfaces.services import IQueryCache
    from app.application.use_cases.search import SearchExecutor

MAX_PAGE_SIZE = 100


def normalize_page_request(
    page: int, size: int, max_size: int = MAX_PAGE_SIZE
) -> tuple[int, int]:
    """Validate page and clamp size to [1, max_size].

    Raises:
        ValidationException: page is negative.
    """
    if page < 0:
        raise ValidationException("Page index must not be negative", field="page")
    return page, min(max(size, 1), max_size)


def build_query_spec(
    page: int = 0,
    size: int = 20,
    sort_by: str | None = None,
    sort_dir: str | None = None,
    max_size: int = MAX_PAGE_SIZE,
) -> QuerySpec:
    """Build a normalized QuerySpec (sort field whitelisted, size clamped).

    Raises:
        ValidationException: negative page or unknown sort field.
    """
    page, size = normalize_page_request(page, size, max_size)
    sort_field = (sort_by or "").strip() or DEFAULT_SORT_FIELD
    if sort_field not in SORTABLE_FIELDS:
        raise ValidationException(
            f"Unsupported sort field: {sort_field}. "
            f"Allowed: {', '.join(sorted(SORTABLE_FIELDS))}",
            field="sort_by",
        )
    return QuerySpec(
        page=page,
        size=size,
        sort_field=sort_field,
        sort_direction=SortDirection.parse(sort_dir),
    )


def _clean(value: str | None) -> str | None:
    """Blank filter values impose no constraint."""
    if value is None:
        return None
    return value.strip() or None


def _require(value: str | None, field: str) -> str:
    cleaned = _clean(value)
    if cleaned is None:
        raise ValidationException(f"{field} must not be blank", field=field)
    return cleaned


class ExamQueryService:
    """Read-side exam operations, each answered from its cache tier when fresh.

    Listings and single-field filters use the short tier, multi-criteria
    filters and search the medium tier, reference values and counts the
    long tier. get_by_id is not cached (see ExamService.get_exam).
    """

    def __init__(
        self,
        exam_repo: IExamRepository,
        cache: IQueryCache,
        search_executor: SearchExecutor,
    ) -> None:
        self.exam_repo = exam_repo
        self.cache = cache
        self.search_executor = search_executor

    async def _cached_page(
        self,
        tier: str,
        operation: str,
        filters: dict[str, Any],
        spec: QuerySpec,
    ) -> Page[ExamSummary]:
        spec = QuerySpec(
            page=spec.page,
            size=spec.size,
            sort_field=spec.sort_field,
            sort_direction=spec.sort_direction,
            filters={k: v for k, v in filters.items() if v is not None},
        )
        key = query_key(operation, spec.filters, spec.page, spec.size, spec.sort_token)
        return await self.cache.get_or_load(
            tier, key, lambda: self.exam_repo.find_page(spec)
        )

    @traced("exam.list")
    async def list_exams(self, spec: QuerySpec) -> Page[ExamSummary]:
        """Return one page of all exams (sorted per spec)."""
        return await self._cached_page(CACHE_TIER_SHORT, CACHE_PREFIX_EXAMS, {}, spec)

    @traced("exam.by_degree")
    async def by_degree(self, degree: str, spec: QuerySpec) -> Page[ExamSummary]:
        """Return exams of one degree."""
        return await self._cached_page(
            CACHE_TIER_SHORT,
            "exams_by_degree",
            {"degree": _require(degree, "degree")},
            spec,
        )

    @traced("exam.by_year_and_semester")
    async def by_year_and_semester(
        self, year: str, semester: str, spec: QuerySpec
    ) -> Page[ExamSummary]:
        """Return exams of one course year and semester."""
        return await self._cached_page(
            CACHE_TIER_SHORT,
            "exams_by_year_semester",
            {"year": _require(year, "year"), "semester": _require(semester, "semester")},
            spec,
        )

    @traced("exam.by_subject")
    async def by_subject(self, subject: str, spec: QuerySpec) -> Page[ExamSummary]:
        """Return exams whose subject contains the text (case-insensitive)."""
        return await self._cached_page(
            CACHE_TIER_SHORT,
            "exams_by_subject",
            {"subject_contains": _require(subject, "subject")},
            spec,
        )

    @traced("exam.by_date_range")
    async def by_date_range(
        self, start: datetime, end: datetime, spec: QuerySpec
    ) -> Page[ExamSummary]:
        """Return exams dated within [start, end] (inclusive).

        Raises:
            ValidationException: start is after end.
        """
        start_utc, end_utc = ensure_utc(start), ensure_utc(end)
        if start_utc > end_utc:
            raise ValidationException(
                "start_date must not be after end_date", field="start_date"
            )
        return await self._cached_page(
            CACHE_TIER_SHORT,
            "exams_by_date_range",
            {"date_from": start_utc, "date_to": end_utc},
            spec,
        )

    @traced("exam.upcoming")
    async def upcoming(
        self, spec: QuerySpec, now: datetime | None = None
    ) -> Page[ExamSummary]:
        """Return exams from the start of the current UTC day onwards, soonest first."""
        spec = QuerySpec(page=spec.page, size=spec.size)
        return await self._cached_page(
            CACHE_TIER_SHORT,
            "exams_upcoming",
            {"date_from": start_of_utc_day(now)},
            spec,
        )

    @traced("exam.by_criteria")
    async def by_criteria(
        self,
        spec: QuerySpec,
        degree: str | None = None,
        year: str | None = None,
        semester: str | None = None,
    ) -> Page[ExamSummary]:
        """Filter by any combination of degree, year, semester (absent = any).

        Always ordered by date ascending (then id).
        """
        spec = QuerySpec(page=spec.page, size=spec.size)
        return await self._cached_page(
            CACHE_TIER_MEDIUM,
            CACHE_PREFIX_BY_CRITERIA,
            {"degree": _clean(degree), "year": _clean(year), "semester": _clean(semester)},
            spec,
        )

    async def search(
        self,
        spec: QuerySpec,
        term: str | None = None,
        degree: str | None = None,
        year: str | None = None,
        semester: str | None = None,
    ) -> Page[ExamSummary]:
        """Free-text search when term is non-blank, else the multi-criteria listing.

        Blank or whitespace-only terms never reach the search executor.
        """
        cleaned = _clean(term)
        if cleaned is None:
            return await self.by_criteria(spec, degree=degree, year=year, semester=semester)
        return await self.search_executor.search(cleaned, spec.page, spec.size)

    @traced("exam.reference_values")
    async def reference_values(self, field: str) -> list[str]:
        """Distinct values of degree, semester, school, room (ascending) or year (descending)."""
        if field not in REFERENCE_FIELDS:
            raise ValidationException(f"Unsupported reference field: {field}", field="field")
        return await self.cache.get_or_load(
            CACHE_TIER_LONG,
            reference_key(field),
            lambda: self.exam_repo.distinct_values(
                field, descending=field in DESCENDING_REFERENCE_FIELDS
            ),
        )

    @traced("exam.counts")
    async def exam_counts(self, field: str) -> list[ExamCount]:
        """Exam counts per degree (most first) or per year (latest first)."""
        if field not in REFERENCE_FIELDS:
            raise ValidationException(f"Unsupported grouping field: {field}", field="field")
        return await self.cache.get_or_load(
            CACHE_TIER_LONG, counts_key(field), lambda: self.exam_repo.count_by(field)
        )
