"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.exam_repo import ExamRepository

__all__ = ["BaseRepository", "ExamRepository"]
