"""Exam API: thin routes delegating to ExamQueryService and ExamService.

Static paths are declared before /{exam_id}. Every route checks the
caller's role first, so unauthorized requests never touch the database.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import (
    get_exam_query_service,
    get_exam_service,
    get_exam_service_for_write,
    get_query_spec,
    require_operation,
)
from app.application.dtos.pagination import QuerySpec
from app.application.use_cases.exams import ExamQueryService, ExamService
from app.core.limiter import limit_writes
from app.domain.enums import Operation
from app.schemas.exam import (
    ExamCountResponse,
    ExamPageResponse,
    ExamResponse,
    ExamWriteRequest,
)

router = APIRouter()

# HTTP freshness hints (seconds), independent of the in-process cache
LIST_MAX_AGE = 300
FILTER_MAX_AGE = 600
REFERENCE_MAX_AGE = 1800


def _cache_for(response: Response, seconds: int) -> None:
    response.headers["Cache-Control"] = f"public, max-age={seconds}"


# ---- Listings ----


@router.get("", response_model=ExamPageResponse)
async def list_exams(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.READ_LIST))],
    spec: Annotated[QuerySpec, Depends(get_query_spec)],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Return one page of all exams (sort_by / sort_dir, default date ascending)."""
    page = await query_svc.list_exams(spec)
    _cache_for(response, LIST_MAX_AGE)
    return ExamPageResponse.from_page(page)


@router.get("/search", response_model=ExamPageResponse)
async def search_exams(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.SEARCH))],
    spec: Annotated[QuerySpec, Depends(get_query_spec)],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
    q: str | None = Query(None, max_length=200, description="Free-text term"),
    degree: str | None = Query(None, max_length=255),
    year: str | None = Query(None, max_length=16),
    semester: str | None = Query(None, max_length=16),
):
    """Free-text search when q is non-blank; otherwise filter by degree/year/semester."""
    page = await query_svc.search(
        spec, term=q, degree=degree, year=year, semester=semester
    )
    _cache_for(response, LIST_MAX_AGE)
    return ExamPageResponse.from_page(page)


@router.get("/upcoming", response_model=ExamPageResponse)
async def upcoming_exams(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.READ_LIST))],
    spec: Annotated[QuerySpec, Depends(get_query_spec)],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Return exams from today (UTC) onwards, soonest first."""
    page = await query_svc.upcoming(spec)
    _cache_for(response, LIST_MAX_AGE)
    return ExamPageResponse.from_page(page)


@router.get("/date-range", response_model=ExamPageResponse)
async def exams_by_date_range(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.READ_LIST))],
    spec: Annotated[QuerySpec, Depends(get_query_spec)],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
    start_date: datetime = Query(..., description="Inclusive lower bound (ISO 8601)"),
    end_date: datetime = Query(..., description="Inclusive upper bound (ISO 8601)"),
):
    """Return exams dated between start_date and end_date (inclusive)."""
    page = await query_svc.by_date_range(start_date, end_date, spec)
    _cache_for(response, LIST_MAX_AGE)
    return ExamPageResponse.from_page(page)


@router.get("/degree/{degree}", response_model=ExamPageResponse)
async def exams_by_degree(
    degree: str,
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.READ_LIST))],
    spec: Annotated[QuerySpec, Depends(get_query_spec)],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Return exams of one degree."""
    page = await query_svc.by_degree(degree, spec)
    _cache_for(response, FILTER_MAX_AGE)
    return ExamPageResponse.from_page(page)


@router.get("/subject/{subject}", response_model=ExamPageResponse)
async def exams_by_subject(
    subject: str,
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.READ_LIST))],
    spec: Annotated[QuerySpec, Depends(get_query_spec)],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Return exams whose subject contains the given text (case-insensitive)."""
    page = await query_svc.by_subject(subject, spec)
    _cache_for(response, FILTER_MAX_AGE)
    return ExamPageResponse.from_page(page)


@router.get("/year/{year}/semester/{semester}", response_model=ExamPageResponse)
async def exams_by_year_and_semester(
    year: str,
    semester: str,
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.READ_LIST))],
    spec: Annotated[QuerySpec, Depends(get_query_spec)],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Return exams of one course year and semester."""
    page = await query_svc.by_year_and_semester(year, semester, spec)
    _cache_for(response, FILTER_MAX_AGE)
    return ExamPageResponse.from_page(page)


# ---- Reference values ----


async def _reference(
    field: str, response: Response, query_svc: ExamQueryService
) -> list[str]:
    values = await query_svc.reference_values(field)
    _cache_for(response, REFERENCE_MAX_AGE)
    return values


@router.get("/degrees", response_model=list[str])
async def list_degrees(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.BROWSE_REFERENCE))],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Distinct degrees (ascending)."""
    return await _reference("degree", response, query_svc)


@router.get("/years", response_model=list[str])
async def list_years(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.BROWSE_REFERENCE))],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Distinct course years (descending)."""
    return await _reference("year", response, query_svc)


@router.get("/semesters", response_model=list[str])
async def list_semesters(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.BROWSE_REFERENCE))],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Distinct semesters (ascending)."""
    return await _reference("semester", response, query_svc)


@router.get("/schools", response_model=list[str])
async def list_schools(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.BROWSE_REFERENCE))],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Distinct schools (ascending)."""
    return await _reference("school", response, query_svc)


@router.get("/rooms", response_model=list[str])
async def list_rooms(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.BROWSE_REFERENCE))],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Distinct rooms (ascending; exams without a room are skipped)."""
    return await _reference("room", response, query_svc)


@router.get("/stats/by-degree", response_model=list[ExamCountResponse])
async def exam_counts_by_degree(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.BROWSE_REFERENCE))],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Exam count per degree, largest first."""
    counts = await query_svc.exam_counts("degree")
    _cache_for(response, REFERENCE_MAX_AGE)
    return [ExamCountResponse.model_validate(c) for c in counts]


@router.get("/stats/by-year", response_model=list[ExamCountResponse])
async def exam_counts_by_year(
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.BROWSE_REFERENCE))],
    query_svc: Annotated[ExamQueryService, Depends(get_exam_query_service)],
):
    """Exam count per course year, latest year first."""
    counts = await query_svc.exam_counts("year")
    _cache_for(response, REFERENCE_MAX_AGE)
    return [ExamCountResponse.model_validate(c) for c in counts]


# ---- Single exam ----


@router.get("/{exam_id}", response_model=ExamResponse)
async def get_exam(
    exam_id: int,
    response: Response,
    _: Annotated[object, Depends(require_operation(Operation.READ_ONE))],
    exam_svc: Annotated[ExamService, Depends(get_exam_service)],
):
    """Return one exam; 404 when it does not exist."""
    exam = await exam_svc.get_exam(exam_id)
    _cache_for(response, REFERENCE_MAX_AGE)
    return ExamResponse.model_validate(exam)


@router.post("", response_model=ExamResponse, status_code=201)
@limit_writes
async def create_exam(
    request: Request,
    body: ExamWriteRequest,
    _: Annotated[object, Depends(require_operation(Operation.CREATE))],
    exam_svc: Annotated[ExamService, Depends(get_exam_service_for_write)],
):
    """Create an exam (authenticated or service role)."""
    created = await exam_svc.create_exam(body.to_command())
    return ExamResponse.model_validate(created)


@router.put("/{exam_id}", response_model=ExamResponse)
@limit_writes
async def update_exam(
    request: Request,
    exam_id: int,
    body: ExamWriteRequest,
    _: Annotated[object, Depends(require_operation(Operation.UPDATE))],
    exam_svc: Annotated[ExamService, Depends(get_exam_service_for_write)],
):
    """Replace an exam (authenticated or service role); 404 when missing."""
    updated = await exam_svc.update_exam(exam_id, body.to_command())
    return ExamResponse.model_validate(updated)


@router.delete("/{exam_id}", status_code=204)
@limit_writes
async def delete_exam(
    request: Request,
    exam_id: int,
    _: Annotated[object, Depends(require_operation(Operation.DELETE))],
    exam_svc: Annotated[ExamService, Depends(get_exam_service_for_write)],
):
    """Delete an exam (service role only); 404 when missing."""
    await exam_svc.delete_exam(exam_id)
    return Response(status_code=204)
