"""
Bookshelf API - Database Session Management
============================================

What:  Async SQLAlchemy engine, session factory, ORM base and the per-request
       session dependency.
How:   One engine per process (pooled connections); one AsyncSession per request,
       committed on success and rolled back on error.
Who:   The record store receives the session; the app lifespan creates tables
       (optionally) and disposes the engine on shutdown.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from bookshelf.config import settings


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine for `database_url`.

    Pool options only apply to server databases; SQLite's pool classes
    reject pool_size/max_overflow.
    """
    options: Dict[str, Any] = {
        # SQL echo is noisy; only useful when debugging
        "echo": settings.log_level == "DEBUG",
    }
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(database_url, **options)


engine = build_engine(settings.database_url)

# expire_on_commit=False: records stay readable after commit, which the
# service relies on when it builds responses from saved/removed rows.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models (and Alembic's autogenerate)."""
    pass


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Commits whatever is still pending when the handler finishes, rolls back
    on any error, and always returns the connection to the pool.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create any missing tables registered on `Base.metadata`."""
    # Registers the models on Base.metadata
    from bookshelf.models import book  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close all pooled connections (called from the lifespan on shutdown)."""
    await engine.dispose()
