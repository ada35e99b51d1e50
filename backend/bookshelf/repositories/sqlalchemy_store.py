"""
Bookshelf API - SQLAlchemy Book Store
=====================================

What:  BookStore implementation backed by an AsyncSession.
How:   Each write commits immediately, so a saved or removed book is durable
       by the time the service builds its response. A failed commit rolls the
       session back and re-raises the same exception.
"""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.models.book import Book
from bookshelf.repositories.base import BookStore

logger = logging.getLogger(__name__)


class SqlAlchemyBookStore(BookStore):
    """Book rows in a relational database, one session per request."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def create(self, fields: Mapping[str, Any]) -> Book:
        return Book(**fields)

    async def save(self, book: Book) -> Book:
        self._session.add(book)
        await self._commit()
        return book

    async def find(self) -> List[Book]:
        result = await self._session.execute(select(Book).order_by(Book.id))
        return list(result.scalars().all())

    async def find_one(self, **criteria: Any) -> Optional[Book]:
        result = await self._session.execute(
            select(Book).filter_by(**criteria).order_by(Book.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def remove(self, book: Book) -> Book:
        await self._session.delete(book)
        await self._commit()
        return book

    async def _commit(self) -> None:
        try:
            await self._session.commit()
        except Exception:
            logger.debug("Commit failed, rolling back session")
            await self._session.rollback()
            raise
