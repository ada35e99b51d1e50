"""
Bookshelf API - Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the whole suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_store: AsyncMock standing in for BookStore (service unit tests)
    ├── sample_book_data: a valid create payload
    ├── make_book: builds Book rows without touching a database
    ├── db_engine: engine on a fresh SQLite file with the books table created
    ├── api_app: fresh app whose sessions come from db_engine
    └── test_client: httpx AsyncClient routed into api_app
"""

import os
import tempfile
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Must be set before any bookshelf import: settings and the module-level
# engine are built at import time.
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='bookshelf_test_')}/bootstrap.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from bookshelf.database import Base, build_engine, get_db_session  # noqa: E402
from bookshelf.models.book import Book  # noqa: E402
from bookshelf.repositories.base import BookStore  # noqa: E402


@pytest.fixture
def mock_store():
    """
    A BookStore double.

    create() is synchronous (it only builds an object); everything else is
    awaited. By default save() assigns id=1 and echoes the book back.
    """
    store = AsyncMock(spec=BookStore)
    store.create = MagicMock(side_effect=lambda fields: Book(**fields))

    async def _save(book):
        if book.id is None:
            book.id = 1
        return book

    store.save = AsyncMock(side_effect=_save)
    store.find = AsyncMock(return_value=[])
    store.find_one = AsyncMock(return_value=None)
    store.remove = AsyncMock(side_effect=lambda book: book)
    return store


@pytest.fixture
def sample_book_data():
    return {
        "title": "Dune",
        "author": "Herbert",
        "publisher": "Chilton",
        "year": "1965",
    }


@pytest.fixture
def make_book():
    """Factory for detached Book rows: make_book(id=3, title="Emma")."""

    def _make(**overrides) -> Book:
        fields = {
            "id": 1,
            "title": "Mock Book",
            "author": "Mock Author",
            "publisher": "Mock Publisher",
            "year": "1998",
        }
        fields.update(overrides)
        return Book(**fields)

    return _make


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """An async engine on a throwaway SQLite file with all tables created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'books.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def api_app(db_engine):
    """A fresh app whose request sessions come from db_engine."""
    from bookshelf.main import create_app

    app = create_app()
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _override_session
    return app


@pytest_asyncio.fixture
async def test_client(api_app) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into api_app.

    raise_app_exceptions=False lets tests observe the 500 envelope instead of
    the re-raised server error.
    """
    transport = ASGITransport(app=api_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
