"""
Bookshelf API - Book Route Handlers (Controller)
================================================

What:  POST/GET/PUT/DELETE on /books.
How:   Each handler validates the raw body, calls BookService, and turns the
       returned result into the uniform envelope plus status code.
Who:   Mounted by the app factory in main.py.

Status mapping:
    validation failure   → 400, message is the list of field messages
    Duplicate            → 400 "This book exist in collection!"
    NotFound             → 404 "Book not found!"
    Unexpected           → 500 "Something went wrong!" (cause logged, never returned)
"""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.database import get_db_session
from bookshelf.repositories import BookStore, SqlAlchemyBookStore
from bookshelf.results import (
    NOT_FOUND_MESSAGE,
    UNEXPECTED_MESSAGE,
    Duplicate,
    NotFound,
    Ok,
    ServiceResult,
)
from bookshelf.schemas.book import (
    BookCreate,
    BookRead,
    BookUpdate,
    Envelope,
    FieldErrorDetail,
)
from bookshelf.services.book_service import BookService
from bookshelf.validation import (
    FieldError,
    messages,
    validate_book_create,
    validate_book_update,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["Books"])

BOOK_EXAMPLE = {
    "title": "Dune",
    "author": "Herbert",
    "publisher": "Chilton",
    "year": "1965",
}


# ══════════════════════════════════════════════════════════════════════════
# Dependency Providers (composition root)
# ══════════════════════════════════════════════════════════════════════════

def get_book_store(db: AsyncSession = Depends(get_db_session)) -> BookStore:
    """One store per request, bound to that request's session."""
    return SqlAlchemyBookStore(db)


def get_book_service(store: BookStore = Depends(get_book_store)) -> BookService:
    return BookService(store)


# ══════════════════════════════════════════════════════════════════════════
# Envelope Helpers
# ══════════════════════════════════════════════════════════════════════════

def _respond(status_code: int, envelope: Envelope) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json", exclude_none=True),
    )


def _success(status_code: int, data: Any, message: str) -> JSONResponse:
    return _respond(status_code, Envelope(success=True, data=data, message=message))


def _invalid(errors: List[FieldError]) -> JSONResponse:
    logger.info("Rejected book payload: %s", messages(errors))
    return _respond(
        400,
        Envelope(
            success=False,
            message=messages(errors),
            errors=[FieldErrorDetail(field=e.field, message=e.message) for e in errors],
        ),
    )


def _failure(result: ServiceResult, not_found_message: Optional[str] = None) -> JSONResponse:
    """
    Map a non-Ok result to its status code and envelope.

    `not_found_message` replaces the service's own NotFound text when the
    endpoint has a fixed message of its own.
    """
    if isinstance(result, NotFound):
        return _respond(404, Envelope(success=False, message=not_found_message or result.message))
    if isinstance(result, Duplicate):
        return _respond(400, Envelope(success=False, message=result.message))
    return _respond(500, Envelope(success=False, message=UNEXPECTED_MESSAGE))


# ══════════════════════════════════════════════════════════════════════════
# Routes
# ══════════════════════════════════════════════════════════════════════════

@router.post(
    "",
    status_code=201,
    response_model=Envelope[BookRead],
    responses={
        201: {"description": "Book created", "model": Envelope[BookRead]},
        400: {"description": "Invalid fields or duplicate title", "model": Envelope},
        500: {"description": "Server error", "model": Envelope},
    },
    summary="Create a book",
)
async def create_book(
    payload: Any = Body(None, examples=[BOOK_EXAMPLE]),
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """
    Create a book record.

    All four fields are required. A title that already exists is rejected
    with 400 and no row is written.
    """
    errors = validate_book_create(payload)
    if errors:
        return _invalid(errors)

    result = await service.create(BookCreate(**payload))
    if isinstance(result, Ok):
        return _success(201, result.value, "Book created successfully!")
    return _failure(result)


@router.get(
    "",
    response_model=Envelope[List[BookRead]],
    responses={500: {"description": "Server error", "model": Envelope}},
    summary="List all books",
)
async def list_books(service: BookService = Depends(get_book_service)) -> JSONResponse:
    result = await service.find_all()
    if isinstance(result, Ok):
        return _success(200, result.value, "Books fetched successfully!")
    return _failure(result)


@router.get(
    "/{book_id}",
    response_model=Envelope[BookRead],
    responses={
        404: {"description": "Book not found", "model": Envelope},
        500: {"description": "Server error", "model": Envelope},
    },
    summary="Get a book by id",
)
async def get_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    result = await service.find_one(book_id)
    if isinstance(result, Ok):
        return _success(200, result.value, "Book fetched successfully!")
    return _failure(result, not_found_message=NOT_FOUND_MESSAGE)


@router.put(
    "/{book_id}",
    response_model=Envelope[BookRead],
    responses={
        400: {"description": "Invalid fields", "model": Envelope},
        404: {"description": "Book not found", "model": Envelope},
        500: {"description": "Server error", "model": Envelope},
    },
    summary="Update some or all fields of a book",
)
async def update_book(
    book_id: int,
    payload: Any = Body(None, examples=[{"year": "1966"}]),
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """
    Merge the supplied fields into an existing book.

    Fields left out of the body keep their stored values.
    """
    errors = validate_book_update(payload)
    if errors:
        return _invalid(errors)

    result = await service.update(book_id, BookUpdate(**payload))
    if isinstance(result, Ok):
        return _success(200, result.value, "Book updated successfully!")
    return _failure(result)


@router.delete(
    "/{book_id}",
    response_model=Envelope[BookRead],
    responses={
        404: {"description": "Book not found", "model": Envelope},
        500: {"description": "Server error", "model": Envelope},
    },
    summary="Delete a book",
)
async def delete_book(
    book_id: int,
    service: BookService = Depends(get_book_service),
) -> JSONResponse:
    """Delete a book; the response carries the record as it was before deletion."""
    result = await service.remove(book_id)
    if isinstance(result, Ok):
        return _success(200, result.value, "Book deleted successfully!")
    return _failure(result)
