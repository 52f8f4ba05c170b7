"""ExamService unit tests with a mocked repository and cache."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.dtos.exam import ExamResult, ExamWrite
from app.application.use_cases.exams import ExamService
from app.domain.exceptions import ResourceNotFoundException, ValidationException


def _write(**overrides) -> ExamWrite:
    fields = {
        "subject": "Bases de Datos",
        "degree": "Ingeniería Informática",
        "year": "2",
        "semester": "1",
        "date": datetime(2030, 1, 25, 16, 0, tzinfo=UTC),
        "school": "ETSII",
        "room": "B2",
    }
    fields.update(overrides)
    return ExamWrite(**fields)


def _result(exam_id: int = 7) -> ExamResult:
    data = _write()
    return ExamResult(
        id=exam_id,
        subject=data.subject,
        degree=data.degree,
        year=data.year,
        semester=data.semester,
        date=data.date,
        room=data.room,
        school=data.school,
    )


@pytest.fixture
def exam_repo() -> AsyncMock:
    repo = AsyncMock()
    # Commit is immediate in unit tests
    repo.after_commit = MagicMock(side_effect=lambda callback: callback())
    return repo


@pytest.fixture
def cache() -> MagicMock:
    return MagicMock()


async def test_get_exam_returns_result(exam_repo) -> None:
    exam_repo.get_by_id = AsyncMock(return_value=_result())
    exam = await ExamService(exam_repo).get_exam(7)
    assert exam.id == 7


async def test_get_missing_exam_raises_not_found(exam_repo) -> None:
    exam_repo.get_by_id = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException):
        await ExamService(exam_repo).get_exam(404)


async def test_create_clears_cache(exam_repo, cache) -> None:
    exam_repo.create = AsyncMock(return_value=_result(11))
    exam = await ExamService(exam_repo, cache).create_exam(_write())
    assert exam.id == 11
    cache.clear.assert_called_once_with()


async def test_create_without_invalidation_keeps_cache(exam_repo, cache) -> None:
    exam_repo.create = AsyncMock(return_value=_result(11))
    await ExamService(exam_repo, cache, invalidate_on_write=False).create_exam(_write())
    cache.clear.assert_not_called()


async def test_create_rejects_blank_required_field(exam_repo, cache) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await ExamService(exam_repo, cache).create_exam(_write(school="  "))
    assert exc_info.value.details == {"field": "school"}
    exam_repo.create.assert_not_awaited()


async def test_update_missing_exam_raises_and_keeps_cache(exam_repo, cache) -> None:
    exam_repo.update = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException):
        await ExamService(exam_repo, cache).update_exam(5, _write())
    cache.clear.assert_not_called()


async def test_update_returns_replaced_exam(exam_repo, cache) -> None:
    exam_repo.update = AsyncMock(return_value=_result(5))
    exam = await ExamService(exam_repo, cache).update_exam(5, _write())
    assert exam.id == 5
    exam_repo.update.assert_awaited_once_with(5, _write())
    cache.clear.assert_called_once_with()


async def test_delete_missing_exam_raises(exam_repo) -> None:
    exam_repo.delete = AsyncMock(return_value=False)
    with pytest.raises(ResourceNotFoundException):
        await ExamService(exam_repo).delete_exam(5)


async def test_delete_clears_cache(exam_repo, cache) -> None:
    exam_repo.delete = AsyncMock(return_value=True)
    await ExamService(exam_repo, cache).delete_exam(5)
    cache.clear.assert_called_once_with()


async def test_exists_delegates(exam_repo) -> None:
    exam_repo.exists = AsyncMock(return_value=True)
    assert await ExamService(exam_repo).exists(1) is True


async def test_cache_is_cleared_only_once_the_write_commits(exam_repo, cache) -> None:
    exam_repo.after_commit = MagicMock()
    exam_repo.create = AsyncMock(return_value=_result(11))
    await ExamService(exam_repo, cache).create_exam(_write())
    cache.clear.assert_not_called()
    (on_commit,) = exam_repo.after_commit.call_args.args
    on_commit()
    cache.clear.assert_called_once_with()
