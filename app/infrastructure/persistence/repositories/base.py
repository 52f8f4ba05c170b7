"""Base repository: generic get/create/delete, pagination, and error translation."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, event, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.exceptions import PersistenceException
from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, create, delete, and paginated selects.

    Driver errors inside _translate_errors are re-raised as
    PersistenceException so presentation maps them to 503.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    def after_commit(self, callback: Callable[[], None]) -> None:
        """Run callback once the session's open transaction commits.

        Runs it immediately when no transaction is open. Write sessions live
        for one request, so a rolled-back write never triggers it.
        """
        if not self.db.in_transaction():
            callback()
            return
        event.listen(
            self.db.sync_session,
            "after_commit",
            lambda _session: callback(),
            once=True,
        )

    @asynccontextmanager
    async def _translate_errors(
        self, operation: str, *, rollback: bool = False
    ) -> AsyncIterator[None]:
        """Re-raise SQLAlchemyError as PersistenceException.

        With rollback=True the session is rolled back first so the same
        session can run another statement afterwards.
        """
        try:
            yield
        except SQLAlchemyError as e:
            if rollback:
                await self.db.rollback()
            raise PersistenceException(operation, str(e.__class__.__name__)) from e

    async def get_by_id(self, entity_id: Any) -> ModelType | None:
        """Return a single record by primary key, or None."""
        async with self._translate_errors("get_by_id"):
            return await self.db.get(self.model, entity_id)

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record (flush assigns the primary key)."""
        async with self._translate_errors("create"):
            self.db.add(obj)
            await self.db.flush()
            await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record."""
        async with self._translate_errors("delete"):
            await self.db.delete(obj)
            await self.db.flush()

    async def _paginate(
        self, stmt: Select[Any], page: int, size: int
    ) -> tuple[list[Any], int]:
        """Run stmt for one page and a count over the same filters.

        Returns:
            (rows for the page, total matching rows).
        """
        count_stmt = select(func.count()).select_from(
            stmt.order_by(None).subquery()
        )
        total = (await self.db.execute(count_stmt)).scalar_one()
        result = await self.db.execute(stmt.offset(page * size).limit(size))
        return list(result.scalars().all()), int(total)
