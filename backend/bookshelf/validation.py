"""
Bookshelf API - Request Body Validation
=======================================

What:  Explicit field checks for book payloads, run by the controller before
       the service is called.
How:   Each validator takes the raw JSON body and returns a list of FieldError;
       an empty list means the body is acceptable.

Rules (every field):
    - must be present on create
    - must be a string
    - must not be empty
    - length between 3 and 255 characters (no trimming)

Messages are fixed strings the API has always returned, e.g.
"title must be longer than or equal to 3 characters" and
"the book should have a title".
"""

from dataclasses import dataclass
from typing import Any, Dict, List

BOOK_FIELDS = ("title", "author", "publisher", "year")

MIN_LENGTH = 3
MAX_LENGTH = 255

NOT_EMPTY_MESSAGES: Dict[str, str] = {
    "title": "the book should have a title",
    "author": "the book should have an author",
    "publisher": "the book should have a publisher",
    "year": "the book should have a published year",
}

BODY_FIELD = "body"


@dataclass(frozen=True)
class FieldError:
    """One reason a single field was rejected."""

    field: str
    message: str


def _too_short(field: str) -> FieldError:
    return FieldError(field, f"{field} must be longer than or equal to {MIN_LENGTH} characters")


def _too_long(field: str) -> FieldError:
    return FieldError(field, f"{field} must be shorter than or equal to {MAX_LENGTH} characters")


def _not_a_string(field: str) -> FieldError:
    return FieldError(field, f"{field} must be a string")


def _empty(field: str) -> FieldError:
    return FieldError(field, NOT_EMPTY_MESSAGES[field])


def _check_text(field: str, value: Any) -> List[FieldError]:
    if not isinstance(value, str):
        return [_not_a_string(field)]

    errors: List[FieldError] = []
    if len(value) < MIN_LENGTH:
        errors.append(_too_short(field))
    elif len(value) > MAX_LENGTH:
        errors.append(_too_long(field))
    if value == "":
        errors.append(_empty(field))
    return errors


def _check_body(payload: Any) -> List[FieldError]:
    if not isinstance(payload, dict):
        return [FieldError(BODY_FIELD, "request body must be a JSON object")]
    return []


def validate_book_create(payload: Any) -> List[FieldError]:
    """
    Validate a POST /books body.

    A missing (or null) field reports the length, not-empty and type
    messages together, the same set a client gets for `"title": ""`
    plus the type message.
    """
    errors = _check_body(payload)
    if errors:
        return errors

    for field in BOOK_FIELDS:
        value = payload.get(field)
        if value is None:
            errors.extend([_too_short(field), _empty(field), _not_a_string(field)])
        else:
            errors.extend(_check_text(field, value))
    return errors


def validate_book_update(payload: Any) -> List[FieldError]:
    """
    Validate a PUT /books/{id} body.

    Only fields present in the body are checked; an explicit null is not a
    string and is rejected. Unknown keys are ignored.
    """
    errors = _check_body(payload)
    if errors:
        return errors

    for field in BOOK_FIELDS:
        if field in payload:
            errors.extend(_check_text(field, payload[field]))
    return errors


def messages(errors: List[FieldError]) -> List[str]:
    """Flatten field errors into the message list used by the envelope."""
    return [error.message for error in errors]
