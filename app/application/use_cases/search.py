"""Free-text exam search: full-text primary with a substring fallback.

The executor tries the ranked full-text strategy first; any failure there
(e.g. the database lacks full-text support) is logged and the substring
strategy answers instead. Results are cached in the medium tier.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.core.cache_keys import normalize_term, search_key
from app.core.constants import CACHE_TIER_MEDIUM
from app.domain.exceptions import SearchExecutionException, ValidationException
from app.shared.telemetry.tracing import add_span_attributes, add_span_event, traced

if TYPE_CHECKING:
    from app.application.dtos.exam import ExamSummary
    from app.application.dtos.pagination import Page
    from app.application.interfaces.repositories import IExamRepository
    from app.application.interfaces.services import IQueryCache, ISearchStrategy

logger = logging.getLogger(__name__)


class RankedSearch:
    """Primary strategy: repository full-text search (date asc, then id)."""

    name = "fulltext"

    def __init__(self, exam_repo: IExamRepository) -> None:
        self.exam_repo = exam_repo

    async def search(self, term: str, page: int, size: int) -> Page[ExamSummary]:
        return await self.exam_repo.full_text_search(term, page, size)


class SubstringSearch:
    """Fallback strategy: case-insensitive substring on subject or degree."""

    name = "substring"

    def __init__(self, exam_repo: IExamRepository) -> None:
        self.exam_repo = exam_repo

    async def search(self, term: str, page: int, size: int) -> Page[ExamSummary]:
        return await self.exam_repo.substring_search(term, page, size)


class SearchExecutor:
    """Run a search through primary then fallback, caching results (medium tier)."""

    def __init__(
        self,
        primary: ISearchStrategy,
        fallback: ISearchStrategy,
        cache: IQueryCache | None = None,
    ) -> None:
        self.primary = primary
        self.fallback = fallback
        self.cache = cache

    @traced("exam.search")
    async def search(self, term: str, page: int, size: int) -> Page[ExamSummary]:
        """Return one page of matches for term.

        Callers route blank terms to the multi-criteria listing; a blank
        term here is a programming error and raises ValidationException.

        Raises:
            ValidationException: term is empty or whitespace.
            SearchExecutionException: both strategies failed.
        """
        if term is None or not term.strip():
            raise ValidationException("Search term must not be blank", field="q")
        normalized = normalize_term(term)
        if self.cache is None:
            return await self._execute(normalized, page, size)
        key = search_key(normalized, page, size)
        return await self.cache.get_or_load(
            CACHE_TIER_MEDIUM, key, lambda: self._execute(normalized, page, size)
        )

    async def _execute(self, term: str, page: int, size: int) -> Page[ExamSummary]:
        try:
            result = await self.primary.search(term, page, size)
        except Exception as e:
            logger.warning(
                "Search strategy %s failed (%s); falling back to %s",
                self.primary.name,
                e.__class__.__name__,
                self.fallback.name,
            )
            add_span_event(
                "search.fallback",
                {"from": self.primary.name, "to": self.fallback.name},
            )
        else:
            add_span_attributes(**{"search.strategy": self.primary.name})
            return result
        try:
            result = await self.fallback.search(term, page, size)
        except Exception as e:
            logger.error(
                "Fallback search strategy %s failed: %s", self.fallback.name, e
            )
            raise SearchExecutionException(self.fallback.name, str(e)) from e
        add_span_attributes(**{"search.strategy": self.fallback.name})
        return result
