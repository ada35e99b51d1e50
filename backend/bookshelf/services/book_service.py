"""
Bookshelf API - Book Service (Domain Rules)
===========================================

What:  The rules around book records: unique titles on create, must-exist on
       fetch/update/delete, and partial merges on update.
How:   Every method re-reads from the injected BookStore (no caching) and
       returns a tagged result from `bookshelf.results`. Exceptions raised by
       the store are logged here and returned as Unexpected.
Who:   Built per request by the dependency providers in routes/books.py.

Concurrency:
    Update and remove are lookup-then-mutate sequences with no locking. Two
    requests on the same id can interleave (lost update, double delete).
"""

import logging
from typing import List, Optional

from bookshelf.models.book import Book
from bookshelf.repositories.base import BookStore
from bookshelf.results import Duplicate, NotFound, Ok, ServiceResult, Unexpected
from bookshelf.schemas.book import BookCreate, BookRead, BookUpdate

logger = logging.getLogger(__name__)

# Largest value the books.id column (32-bit INTEGER) can hold
MAX_BOOK_ID = 2_147_483_647


class BookService:
    """
    Domain logic for book records.

    Error Handling Strategy:
        Missing ids and duplicate titles are expected outcomes and come back
        as NotFound / Duplicate. Anything the store raises is wrapped in
        Unexpected with the raised exception as its cause.
    """

    def __init__(self, store: BookStore):
        self.store = store

    async def _get(self, book_id: int) -> Optional[Book]:
        # No row can carry an id outside the column range; drivers refuse to bind one
        if not 1 <= book_id <= MAX_BOOK_ID:
            return None
        return await self.store.find_one(id=book_id)

    async def create(self, data: BookCreate) -> ServiceResult[BookRead]:
        """
        Persist a new book unless one with the same title already exists.

        Title comparison is exact: no case folding, no trimming.
        """
        try:
            existing = await self.store.find_one(title=data.title)
            if existing is not None:
                logger.info("Rejected duplicate title %r (book %s)", data.title, existing.id)
                return Duplicate()

            book = self.store.create(data.model_dump())
            saved = await self.store.save(book)
            logger.info("Book %s created: %r", saved.id, saved.title)
            return Ok(BookRead.model_validate(saved))

        except Exception as e:
            logger.error("Store failure creating book: %s", str(e), exc_info=True)
            return Unexpected(cause=e)

    async def find_all(self) -> ServiceResult[List[BookRead]]:
        """Every persisted book, in the order the store returns them."""
        try:
            books = await self.store.find()
            return Ok([BookRead.model_validate(book) for book in books])
        except Exception as e:
            logger.error("Store failure listing books: %s", str(e), exc_info=True)
            return Unexpected(cause=e)

    async def find_one(self, book_id: int) -> ServiceResult[BookRead]:
        try:
            book = await self._get(book_id)
            if book is None:
                return NotFound(message="Book not found")
            return Ok(BookRead.model_validate(book))
        except Exception as e:
            logger.error("Store failure fetching book %s: %s", book_id, str(e), exc_info=True)
            return Unexpected(cause=e)

    async def update(self, book_id: int, data: BookUpdate) -> ServiceResult[BookRead]:
        """
        Overlay the supplied fields on an existing book.

        Fields absent from `data` keep their stored values. The unique-title
        rule is not re-checked here.
        """
        try:
            book = await self._get(book_id)
            if book is None:
                logger.info("Update skipped: book %s not found", book_id)
                return NotFound()

            changes = data.model_dump(exclude_unset=True)
            for field, value in changes.items():
                setattr(book, field, value)

            saved = await self.store.save(book)
            logger.info("Book %s updated: fields=%s", book_id, sorted(changes))
            return Ok(BookRead.model_validate(saved))

        except Exception as e:
            logger.error("Store failure updating book %s: %s", book_id, str(e), exc_info=True)
            return Unexpected(cause=e)

    async def remove(self, book_id: int) -> ServiceResult[BookRead]:
        """Delete a book and return it as it was just before deletion."""
        try:
            book = await self._get(book_id)
            if book is None:
                logger.info("Delete skipped: book %s not found", book_id)
                return NotFound()

            # Snapshot first: a deleted row may come back detached or expired
            snapshot = BookRead.model_validate(book)
            await self.store.remove(book)
            logger.info("Book %s deleted", book_id)
            return Ok(snapshot)

        except Exception as e:
            logger.error("Store failure deleting book %s: %s", book_id, str(e), exc_info=True)
            return Unexpected(cause=e)
