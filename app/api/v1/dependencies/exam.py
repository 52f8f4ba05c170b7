"""Exam and query cache dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query, Request

from app.api.v1.dependencies.db import get_exam_repo, get_exam_repo_for_write
from app.application.dtos.pagination import QuerySpec
from app.application.use_cases.exams import (
    ExamQueryService,
    ExamService,
    build_query_spec,
)
from app.application.use_cases.search import RankedSearch, SearchExecutor, SubstringSearch
from app.core.config import get_settings
from app.infrastructure.cache.memory_cache import QueryCache
from app.infrastructure.persistence.repositories import ExamRepository


def get_query_cache(request: Request) -> QueryCache:
    """Process query cache created in the app lifespan."""
    return request.app.state.query_cache


async def get_search_executor(
    exam_repo: Annotated[ExamRepository, Depends(get_exam_repo)],
    cache: Annotated[QueryCache, Depends(get_query_cache)],
) -> SearchExecutor:
    """Full-text search with substring fallback over the request's session."""
    return SearchExecutor(
        primary=RankedSearch(exam_repo),
        fallback=SubstringSearch(exam_repo),
        cache=cache,
    )


async def get_exam_query_service(
    exam_repo: Annotated[ExamRepository, Depends(get_exam_repo)],
    cache: Annotated[QueryCache, Depends(get_query_cache)],
    search_executor: Annotated[SearchExecutor, Depends(get_search_executor)],
) -> ExamQueryService:
    """Read-side exam queries (cached)."""
    return ExamQueryService(exam_repo, cache, search_executor)


async def get_exam_service(
    exam_repo: Annotated[ExamRepository, Depends(get_exam_repo)],
    cache: Annotated[QueryCache, Depends(get_query_cache)],
) -> ExamService:
    """Exam lookups (read session)."""
    return ExamService(exam_repo, cache)


async def get_exam_service_for_write(
    exam_repo: Annotated[ExamRepository, Depends(get_exam_repo_for_write)],
    cache: Annotated[QueryCache, Depends(get_query_cache)],
) -> ExamService:
    """Exam writes (transactional session; clears the cache when configured)."""
    return ExamService(
        exam_repo,
        cache,
        invalidate_on_write=get_settings().cache_invalidate_on_write,
    )


def get_query_spec(
    page: Annotated[int, Query(description="Zero-based page index")] = 0,
    size: Annotated[
        int | None, Query(description="Page size (clamped to 1..MAX_PAGE_SIZE)")
    ] = None,
    sort_by: Annotated[str | None, Query(description="Sort field (default date)")] = None,
    sort_dir: Annotated[str | None, Query(description="asc (default) or desc")] = None,
) -> QuerySpec:
    """Normalized paging and sort from query parameters."""
    settings = get_settings()
    return build_query_spec(
        page=page,
        size=settings.default_page_size if size is None else size,
        sort_by=sort_by,
        sort_dir=sort_dir,
        max_size=settings.max_page_size,
    )
