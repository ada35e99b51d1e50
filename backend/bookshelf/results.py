"""
Bookshelf API - Service Result Variants
=======================================

What:  The tagged outcomes returned by BookService.
How:   Every service call returns exactly one of:

        Ok(value)          the operation succeeded
        NotFound(message)  no book with the requested id
        Duplicate(message) a book with the same title already exists
        Unexpected(cause)  the store (or anything else) failed

       The controller branches on the variant to pick the status code and
       envelope; store exceptions never cross the service boundary.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

NOT_FOUND_MESSAGE = "Book not found!"
DUPLICATE_MESSAGE = "This book exist in collection!"
UNEXPECTED_MESSAGE = "Something went wrong!"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    message: str = NOT_FOUND_MESSAGE


@dataclass(frozen=True)
class Duplicate:
    message: str = DUPLICATE_MESSAGE


@dataclass(frozen=True)
class Unexpected:
    """A failure the client is not told about; `cause` stays server-side."""

    cause: BaseException
    message: str = UNEXPECTED_MESSAGE


ServiceResult = Union[Ok[T], NotFound, Duplicate, Unexpected]
