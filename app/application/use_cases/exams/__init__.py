"""Exam use cases: read-side queries and write operations."""

from app.application.use_cases.exams.exam_operations import ExamService
from app.application.use_cases.exams.exam_queries import (
    ExamQueryService,
    build_query_spec,
    normalize_page_request,
)

__all__ = [
    "ExamQueryService",
    "ExamService",
    "build_query_spec",
    "normalize_page_request",
]
