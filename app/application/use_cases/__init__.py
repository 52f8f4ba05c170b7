"""Application use cases: one entry point per workflow."""

from app.application.use_cases.exams import ExamQueryService, ExamService
from app.application.use_cases.search import RankedSearch, SearchExecutor, SubstringSearch

__all__ = [
    "ExamQueryService",
    "ExamService",
    "RankedSearch",
    "SearchExecutor",
    "SubstringSearch",
]
