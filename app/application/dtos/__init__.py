"""Application DTOs (no ORM dependency)."""

from app.application.dtos.auth import Claims, Principal
from app.application.dtos.exam import ExamCount, ExamResult, ExamSummary, ExamWrite
from app.application.dtos.pagination import Page, QuerySpec

__all__ = [
    "Claims",
    "ExamCount",
    "ExamResult",
    "ExamSummary",
    "ExamWrite",
    "Page",
    "Principal",
    "QuerySpec",
]
