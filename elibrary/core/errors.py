"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``elibrary.main`` maps them onto HTTP responses.
"""
from typing import Any, Dict, List, Optional


class FieldError:
    """One offending field and the reason it was rejected."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldError):
            return NotImplemented
        return (self.field, self.message) == (other.field, other.message)

    def __repr__(self) -> str:
        return f"FieldError({self.field!r}, {self.message!r})"


class LibraryError(Exception):
    """Base class for every error the service reports to callers."""

    status_code = 400
    error_code = "LIBRARY_ERROR"

    def __init__(self, message: str, errors: Optional[List[FieldError]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": self.message,
            "error_code": self.error_code,
            "errors": [e.to_dict() for e in self.errors],
        }


class ValidationError(LibraryError):
    error_code = "VALIDATION_ERROR"

    def __init__(self, errors: List[FieldError], message: str = "Validation failed"):
        super().__init__(message, errors)

    @property
    def fields(self) -> List[str]:
        return [e.field for e in self.errors]


class DuplicateKeyError(LibraryError):
    status_code = 409
    error_code = "DUPLICATE_KEY"

    def __init__(self, field: str, value: Any):
        super().__init__(
            f"{field} {value} already exists",
            [FieldError(field, f"{field} must be unique")],
        )
        self.field = field
        self.value = value


class NotFoundError(LibraryError):
    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.resource_id = resource_id


class InsufficientStockError(LibraryError):
    error_code = "INSUFFICIENT_STOCK"

    def __init__(self, book_id: str, requested: Any, available: Optional[int] = None):
        super().__init__("Insufficient copies available")
        self.book_id = book_id
        self.requested = requested
        self.available = available


class InternalError(LibraryError):
    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
