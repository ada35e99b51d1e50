"""
Bookshelf API - Record Store Layer
==================================

What:  Persistence for Book rows, behind an abstract interface.

Store Inventory:
    - BookStore (abstract): create / save / find / find_one / remove
    - SqlAlchemyBookStore: implementation over an AsyncSession

The store never translates errors; whatever the database raises reaches the
service unchanged.
"""

from bookshelf.repositories.base import BookStore
from bookshelf.repositories.sqlalchemy_store import SqlAlchemyBookStore

__all__ = ["BookStore", "SqlAlchemyBookStore"]
