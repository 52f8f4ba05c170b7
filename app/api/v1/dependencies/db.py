"""DB session and repository dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import ExamRepository


async def get_exam_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ExamRepository:
    """Exam repository for read operations."""
    return ExamRepository(db, fulltext_config=get_settings().fulltext_config)


async def get_exam_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ExamRepository:
    """Exam repository for create/update/delete (one transaction per request)."""
    return ExamRepository(db, fulltext_config=get_settings().fulltext_config)
