"""Field rules for books and borrows.

Each ``validate_*`` function returns a list of :class:`FieldError`; an empty
list means the input is acceptable. Partial validation only looks at the keys
present in ``fields``.
"""
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from elibrary.core.errors import FieldError, ValidationError
from elibrary.models.models import GENRES

ISBN_PATTERN = re.compile(r"[0-9-]+")
GENRE_MESSAGE = "Genre must be one of: " + ", ".join(GENRES)

_REQUIRED_MESSAGES = {
    "title": "Title is required",
    "author": "Author is required",
    "genre": "Genre is required",
    "isbn": "ISBN is required",
    "copies": "Copies field is required",
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_book(fields: Dict[str, Any], partial: bool = False) -> List[FieldError]:
    errors = []
    for name, message in _REQUIRED_MESSAGES.items():
        if name not in fields:
            if not partial:
                errors.append(FieldError(name, message))
            continue
        value = fields[name]
        if _blank(value):
            errors.append(FieldError(name, message))
            continue
        if name in ("title", "author") and not isinstance(value, str):
            errors.append(FieldError(name, f"{name.capitalize()} must be text"))
        elif name == "genre" and value not in GENRES:
            errors.append(FieldError("genre", GENRE_MESSAGE))
        elif name == "isbn" and not (isinstance(value, str) and ISBN_PATTERN.fullmatch(value)):
            errors.append(FieldError("isbn", f"ISBN {value} is not a valid format"))
        elif name == "copies":
            if not _is_int(value):
                errors.append(FieldError("copies", "Copies must be an integer"))
            elif value < 0:
                errors.append(FieldError("copies", "Copies must be a positive number"))

    if "description" in fields and fields["description"] is not None:
        if not isinstance(fields["description"], str):
            errors.append(FieldError("description", "Description must be text"))
    return errors


def as_utc(value: datetime) -> datetime:
    """Normalise to naive UTC; naive input is taken to already be UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def validate_borrow(quantity: Any, due_date: Any, now: Optional[datetime] = None) -> List[FieldError]:
    errors = []
    if quantity is None:
        errors.append(FieldError("quantity", "Quantity is required"))
    elif not _is_int(quantity):
        errors.append(FieldError("quantity", "Quantity must be an integer"))
    elif quantity < 1:
        errors.append(FieldError("quantity", "Quantity must be at least 1"))

    if due_date is None:
        errors.append(FieldError("dueDate", "Due date is required"))
    elif not isinstance(due_date, datetime):
        errors.append(FieldError("dueDate", "Due date must be a date"))
    else:
        current = as_utc(now) if now else datetime.now(timezone.utc).replace(tzinfo=None)
        if as_utc(due_date) <= current:
            errors.append(FieldError("dueDate", "Due date must be in the future"))
    return errors


def raise_for_errors(errors: List[FieldError]) -> None:
    if errors:
        raise ValidationError(errors)
