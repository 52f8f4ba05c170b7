"""Pytest configuration and fixtures for the exam calendar API.

Uses app.main:app for HTTP tests. The database is an in-memory SQLite
(aiosqlite) schema created per test; get_db and get_db_transactional are
overridden to use it, so no PostgreSQL is needed. Full-text search is not
available on SQLite, so search requests exercise the substring fallback.
"""

import os

# Settings are read on first get_settings(); set env before importing the app.
os.environ["JWT_SECRET"] = "test-jwt-secret-for-exam-calendar"
os.environ["DATABASE_URL"] = ""
os.environ["WRITE_RATE_LIMIT"] = "10000/minute"
os.environ.pop("JWT_ISSUER", None)
os.environ.pop("SUPABASE_URL", None)

from datetime import UTC, datetime  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.infrastructure.cache.memory_cache import QueryCache  # noqa: E402
from app.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from app.infrastructure.persistence.models import Exam  # noqa: E402
from app.infrastructure.security.jwt import create_access_token  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture
async def engine():
    """In-memory SQLite engine with the exam schema (one connection shared)."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def query_cache() -> QueryCache:
    """Fresh query cache installed on app.state (ASGITransport skips the lifespan)."""
    cache = QueryCache.from_settings(get_settings())
    app.state.query_cache = cache
    return cache


@pytest.fixture
async def client(session_factory, query_cache) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) backed by the SQLite schema."""

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_db_transactional():
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def seeded_exams(session_factory) -> list[Exam]:
    """Insert a small exam calendar and return the stored rows (ids assigned)."""
    rows = [
        Exam(
            subject="Cálculo I",
            degree="Ingeniería Informática",
            year="1",
            semester="1",
            date=datetime(2030, 1, 20, 9, 0, tzinfo=UTC),
            room="A1",
            school="ETSII",
        ),
        Exam(
            subject="Álgebra Lineal",
            degree="Ingeniería Informática",
            year="1",
            semester="2",
            date=datetime(2030, 6, 10, 9, 0, tzinfo=UTC),
            room="A2",
            school="ETSII",
        ),
        Exam(
            subject="Bases de Datos",
            degree="Ingeniería Informática",
            year="2",
            semester="1",
            date=datetime(2030, 1, 25, 16, 0, tzinfo=UTC),
            room=None,
            school="ETSII",
        ),
        Exam(
            subject="Química Orgánica",
            degree="Grado en Química",
            year="3",
            semester="1",
            date=datetime(2030, 1, 15, 9, 0, tzinfo=UTC),
            room="Q3",
            school="Facultad de Ciencias",
        ),
    ]
    async with session_factory() as session:
        async with session.begin():
            session.add_all(rows)
    return rows


def _bearer(role: str, **claims) -> dict[str, str]:
    token = create_access_token({"sub": f"user-{role}", "role": role, **claims})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def anon_headers() -> dict[str, str]:
    """Headers carrying the public anon key (raw api-key header, no Bearer)."""
    token = create_access_token({"role": "anon"})
    return {get_settings().api_key_header: token}


@pytest.fixture
def user_headers() -> dict[str, str]:
    """Bearer headers for an authenticated user."""
    return _bearer("authenticated", email="user@example.com")


@pytest.fixture
def service_headers() -> dict[str, str]:
    """Bearer headers for the service role."""
    return _bearer("service_role")


@pytest.fixture
async def pg_session() -> AsyncSession:
    """PostgreSQL session for full-text tests. Rolls back after test.

    Requires TEST_DATABASE_URL (postgresql+asyncpg://...) pointing at a
    scratch database with the unaccent extension installed. Skips otherwise;
    run without it via: pytest -m 'not requires_db'.
    """
    url = os.environ.get("TEST_DATABASE_URL")
    if not url:
        pytest.skip("PostgreSQL not configured: set TEST_DATABASE_URL")
    eng = create_async_engine(url)
    async with eng.connect() as conn:
        trans = await conn.begin()
        await conn.run_sync(Base.metadata.create_all)
        async with AsyncSession(bind=conn, expire_on_commit=False) as session:
            yield session
        await trans.rollback()
    await eng.dispose()
