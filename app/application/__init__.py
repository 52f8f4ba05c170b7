"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (exam repository, query cache).
"""

from app.application.interfaces import IExamRepository, IQueryCache, ISearchStrategy
from app.application.services import AuthorizationService, TokenVerifier
from app.application.use_cases import ExamQueryService, ExamService, SearchExecutor

__all__ = [
    "AuthorizationService",
    "ExamQueryService",
    "ExamService",
    "IExamRepository",
    "IQueryCache",
    "ISearchStrategy",
    "SearchExecutor",
    "TokenVerifier",
]
