"""Application interfaces (ports): repository and service protocols."""

from app.application.interfaces.repositories import IExamRepository
from app.application.interfaces.services import IQueryCache, ISearchStrategy

__all__ = ["IExamRepository", "IQueryCache", "ISearchStrategy"]
