"""
Bookshelf API - Abstract Book Store Interface
=============================================

What:  The contract the service uses to persist books.
How:   Concrete stores subclass BookStore; the service only sees this interface,
       so tests can hand it an AsyncMock and the app hands it a SQLAlchemy store.
Who:   Constructed per request by the dependency providers in routes/books.py.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence

from bookshelf.models.book import Book


class BookStore(ABC):
    """
    Persistence abstraction over the books table.

    Contract:
        - create() builds an unsaved Book; nothing touches the database
        - save() inserts or updates and returns the row with its id assigned
        - find() returns every row in store order (ascending id)
        - find_one() returns the first row matching equality criteria, or None
        - remove() deletes the row and returns the removed Book
        - storage errors propagate unchanged
    """

    @abstractmethod
    def create(self, fields: Mapping[str, Any]) -> Book:
        ...

    @abstractmethod
    async def save(self, book: Book) -> Book:
        ...

    @abstractmethod
    async def find(self) -> Sequence[Book]:
        ...

    @abstractmethod
    async def find_one(self, **criteria: Any) -> Optional[Book]:
        """
        Look up a single book by column equality.

        Example:
            await store.find_one(id=7)
            await store.find_one(title="Dune")
        """
        ...

    @abstractmethod
    async def remove(self, book: Book) -> Book:
        ...
