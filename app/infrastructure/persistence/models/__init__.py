"""Persistence models: ORM entities."""

from app.infrastructure.persistence.models.exam import Exam

__all__ = ["Exam"]
