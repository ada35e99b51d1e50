"""
Bookshelf API - Book SQLAlchemy Model
=====================================

What:  ORM model for the `books` table.
Who:   Built and persisted by the record store; read by Alembic's autogenerate.

Table Design:
    - id: integer primary key assigned by the database (auto-increment),
      never changed after insert
    - title / author / publisher / year: plain text, 3-255 characters,
      enforced by request validation rather than by the database
    - year is text on purpose: values like "1965" or "c. 1600" are both accepted
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.database import Base


class Book(Base):
    """
    A single book record.

    Lifecycle:
        1. Built from validated input and inserted by BookService.create
        2. Overlaid with the supplied fields by BookService.update
        3. Deleted by BookService.remove
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    publisher: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}')>"
