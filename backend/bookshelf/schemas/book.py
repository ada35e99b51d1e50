"""
Bookshelf API - Pydantic Request/Response Schemas
=================================================

What:  The API contract: book payloads, the uniform response envelope,
       and the health check body.
How:   Request models are only built after `bookshelf.validation` has accepted
       the raw body; response models are built from ORM rows.

Envelope:
    Every /books endpoint answers with the same wrapper:

        {"success": true,  "data": {...}, "message": "Book fetched successfully!"}
        {"success": false, "message": "Book not found!"}
        {"success": false, "message": ["title must be ..."], "errors": [...]}
"""

from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, Field

T = TypeVar("T")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BookCreate(BaseModel):
    """Body of POST /books. All four fields are required."""
    title: str = Field(min_length=3, max_length=255)
    author: str = Field(min_length=3, max_length=255)
    publisher: str = Field(min_length=3, max_length=255)
    year: str = Field(min_length=3, max_length=255, description="Publication year, stored as text")


class BookUpdate(BaseModel):
    """
    Body of PUT /books/{id}.

    Any subset of fields may be sent. Only fields that were actually supplied
    are merged (`model_dump(exclude_unset=True)`), so an omitted field never
    overwrites the stored value.
    """
    title: Optional[str] = Field(default=None, min_length=3, max_length=255)
    author: Optional[str] = Field(default=None, min_length=3, max_length=255)
    publisher: Optional[str] = Field(default=None, min_length=3, max_length=255)
    year: Optional[str] = Field(default=None, min_length=3, max_length=255)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BookRead(BaseModel):
    """A persisted book as returned to clients."""
    id: int = Field(description="Database-assigned identifier")
    title: str
    author: str
    publisher: str
    year: str

    model_config = {"from_attributes": True}


class FieldErrorDetail(BaseModel):
    field: str = Field(description="Name of the offending body field")
    message: str = Field(description="Human-readable reason")


class Envelope(BaseModel, Generic[T]):
    """
    Uniform response wrapper returned by every /books endpoint.

    `message` is a list only for validation failures, mirroring `errors`.
    """
    success: bool
    data: Optional[T] = None
    message: Union[str, List[str]]
    errors: Optional[List[FieldErrorDetail]] = None


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
