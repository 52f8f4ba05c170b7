"""Full-text exam search on PostgreSQL (unaccent + regconfig). Require Postgres."""

from datetime import UTC, datetime

import pytest

from app.application.dtos.exam import ExamWrite
from app.infrastructure.persistence.repositories import ExamRepository


@pytest.mark.requires_db
async def test_full_text_search_is_accent_insensitive(pg_session) -> None:
    repo = ExamRepository(pg_session, fulltext_config="spanish")
    await repo.create(
        ExamWrite(
            subject="Química Analítica",
            degree="Grado en Química",
            year="2",
            semester="1",
            date=datetime(2030, 1, 12, 9, 0, tzinfo=UTC),
            school="Facultad de Ciencias",
        )
    )
    page = await repo.full_text_search("quimica analitica", 0, 20)
    assert "Química Analítica" in [e.subject for e in page.items]
