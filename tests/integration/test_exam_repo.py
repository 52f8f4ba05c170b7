"""Exam repository integration tests on an in-memory SQLite schema (aiosqlite)."""

from dataclasses import replace
from datetime import UTC, datetime

import pytest

from app.application.dtos.exam import ExamCount, ExamWrite
from app.application.dtos.pagination import QuerySpec
from app.domain.enums import SortDirection
from app.infrastructure.exceptions import PersistenceException
from app.infrastructure.persistence.repositories import ExamRepository
from app.infrastructure.persistence.repositories.exam_repo import escape_like


@pytest.fixture
def repo(db_session) -> ExamRepository:
    return ExamRepository(db_session)


async def test_find_page_orders_by_date_and_counts_total(repo, seeded_exams) -> None:
    page = await repo.find_page(QuerySpec(page=0, size=2))
    assert [e.subject for e in page.items] == ["Química Orgánica", "Cálculo I"]
    assert page.total_elements == 4
    assert page.total_pages == 2
    assert page.has_next is True
    assert page.items[0].date.tzinfo is not None


async def test_find_page_descending_sort(repo, seeded_exams) -> None:
    page = await repo.find_page(
        QuerySpec(size=10, sort_field="year", sort_direction=SortDirection.DESC)
    )
    assert page.items[0].subject == "Química Orgánica"


async def test_page_past_the_end_is_empty(repo, seeded_exams) -> None:
    page = await repo.find_page(QuerySpec(page=5, size=10))
    assert page.items == []
    assert page.total_elements == 4


async def test_exact_filters(repo, seeded_exams) -> None:
    page = await repo.find_page(
        QuerySpec(filters={"degree": "Ingeniería Informática", "year": "1"})
    )
    assert [e.subject for e in page.items] == ["Cálculo I", "Álgebra Lineal"]


async def test_subject_contains_is_case_insensitive(repo, seeded_exams) -> None:
    page = await repo.find_page(QuerySpec(filters={"subject_contains": "DATOS"}))
    assert [e.subject for e in page.items] == ["Bases de Datos"]


async def test_date_range_is_inclusive(repo, seeded_exams) -> None:
    page = await repo.find_page(
        QuerySpec(
            filters={
                "date_from": datetime(2030, 1, 15, 9, 0, tzinfo=UTC),
                "date_to": datetime(2030, 1, 20, 9, 0, tzinfo=UTC),
            }
        )
    )
    assert [e.subject for e in page.items] == ["Química Orgánica", "Cálculo I"]


async def test_unknown_filter_is_rejected(repo) -> None:
    with pytest.raises(ValueError):
        await repo.find_page(QuerySpec(filters={"password": "x"}))


async def test_substring_search_matches_subject_or_degree(repo, seeded_exams) -> None:
    page = await repo.substring_search("quím", 0, 20)
    assert page.total_elements >= 1
    page = await repo.substring_search("informática", 0, 20)
    assert [e.subject for e in page.items] == [
        "Cálculo I",
        "Bases de Datos",
        "Álgebra Lineal",
    ]


async def test_substring_search_treats_wildcards_literally(repo, seeded_exams) -> None:
    page = await repo.substring_search("%", 0, 20)
    assert page.total_elements == 0


async def test_full_text_search_unavailable_on_sqlite(repo, seeded_exams) -> None:
    """Without PostgreSQL full-text support the repository raises PersistenceException."""
    with pytest.raises(PersistenceException):
        await repo.full_text_search("datos", 0, 20)
    # session was rolled back and is still usable
    assert (await repo.substring_search("datos", 0, 20)).total_elements == 1


async def test_distinct_years_are_descending(repo, seeded_exams) -> None:
    assert await repo.distinct_values("year", descending=True) == ["3", "2", "1"]


async def test_distinct_rooms_skip_missing(repo, seeded_exams) -> None:
    assert await repo.distinct_values("room") == ["A1", "A2", "Q3"]


async def test_count_by_degree_and_year(repo, seeded_exams) -> None:
    assert await repo.count_by("degree") == [
        ExamCount(value="Ingeniería Informática", count=3),
        ExamCount(value="Grado en Química", count=1),
    ]
    assert await repo.count_by("year") == [
        ExamCount(value="3", count=1),
        ExamCount(value="2", count=1),
        ExamCount(value="1", count=2),
    ]


async def test_create_update_delete(repo) -> None:
    data = ExamWrite(
        subject="Redes",
        degree="Ingeniería Telemática",
        year="3",
        semester="2",
        date=datetime(2030, 6, 1, 9, 0, tzinfo=UTC),
        school="ETSIT",
    )
    created = await repo.create(data)
    assert created.id is not None
    assert created.room is None
    assert await repo.exists(created.id)

    updated = await repo.update(
        created.id,
        replace(data, room="T1", subject="Redes II"),
    )
    assert updated is not None
    assert (updated.subject, updated.room) == ("Redes II", "T1")

    assert await repo.delete(created.id) is True
    assert await repo.get_by_id(created.id) is None
    assert await repo.delete(created.id) is False
    assert await repo.update(created.id, data) is None


async def test_after_commit_waits_for_the_transaction(session_factory) -> None:
    calls: list[str] = []
    async with session_factory() as session:
        async with session.begin():
            ExamRepository(session).after_commit(lambda: calls.append("committed"))
            assert calls == []
        assert calls == ["committed"]


async def test_after_commit_skipped_on_rollback(session_factory) -> None:
    calls: list[str] = []
    async with session_factory() as session:
        with pytest.raises(RuntimeError):
            async with session.begin():
                ExamRepository(session).after_commit(lambda: calls.append("x"))
                raise RuntimeError("write failed")
    assert calls == []


async def test_after_commit_runs_at_once_without_transaction(session_factory) -> None:
    calls: list[str] = []
    async with session_factory() as session:
        ExamRepository(session).after_commit(lambda: calls.append("now"))
    assert calls == ["now"]


def test_escape_like() -> None:
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"
