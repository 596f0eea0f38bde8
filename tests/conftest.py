"""
Noteful Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── mock_db_session: Mock AsyncSession for repository unit tests
    ├── db_engine: In-memory SQLite engine with both tables created
    ├── session_factory: async_sessionmaker bound to db_engine
    ├── test_client: HTTPX AsyncClient against an app whose
    │                get_db_session is overridden to use session_factory
    ├── server_error_client: same app, unhandled exceptions returned as 500s
    └── seed_folders / seed_notes: insert the fixture rows below
"""

import os
from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Must be set before any noteful import reads settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from noteful.database import Base, enable_sqlite_foreign_keys, get_db_session
from noteful.models import Folder, Note


# ══════════════════════════════════════════════════════════════════════════
# Test Data
# ══════════════════════════════════════════════════════════════════════════

MALICIOUS_TITLE = (
    'Bad image <img src="https://url.to.file.which/does-not.exist" '
    'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
)
SANITIZED_TITLE = (
    'Bad image <img src="https://url.to.file.which/does-not.exist">. '
    'But not <strong>all</strong> bad.'
)
ESCAPED_SCRIPT_NAME = 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;'


def make_folders_array():
    return [
        {"id": 1, "title": "Folder 1"},
        {"id": 2, "title": "Folder 2"},
        {"id": 3, "title": "Folder 3"},
    ]


def make_notes_array():
    published = datetime(2029, 1, 22, 16, 28, 32, tzinfo=timezone.utc)
    return [
        {
            "id": 1,
            "name": "Note 1",
            "content": "Some content for my first note",
            "folder": 1,
            "date_published": published,
        },
        {
            "id": 2,
            "name": "Note 2",
            "content": "Some content for my second note",
            "folder": 2,
            "date_published": published,
        },
    ]


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for repository tests; no database needed.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Database-Backed Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite shared across connections (StaticPool), with foreign
    keys enforced and the schema created from the ORM metadata. Dropped
    after each test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


def _build_app(session_factory):
    """
    Fresh app whose get_db_session is overridden with a session-per-request
    dependency on the in-memory engine, mirroring the production dependency.
    """
    from noteful.main import create_app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session
    return app


@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX AsyncClient talking to a fresh app over ASGITransport."""
    transport = ASGITransport(app=_build_app(session_factory))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def server_error_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Like test_client, but unhandled exceptions come back as the 500 response
    instead of being re-raised into the test, as a real server would behave.
    """
    transport = ASGITransport(app=_build_app(session_factory), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _insert(session_factory, model, rows):
    async with session_factory() as session:
        session.add_all([model(**row) for row in rows])
        await session.commit()


@pytest_asyncio.fixture
async def seed_folders(session_factory):
    folders = make_folders_array()
    await _insert(session_factory, Folder, folders)
    return folders


@pytest_asyncio.fixture
async def seed_notes(session_factory, seed_folders):
    notes = make_notes_array()
    await _insert(session_factory, Note, notes)
    return notes


@pytest.fixture
def insert_rows(session_factory):
    """Insert arbitrary rows: `await insert_rows(Folder, [{...}])`."""
    async def _insert_rows(model, rows):
        await _insert(session_factory, model, rows)
    return _insert_rows
