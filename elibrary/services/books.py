import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from elibrary.core.errors import DuplicateKeyError, FieldError, NotFoundError, ValidationError
from elibrary.models.models import GENRES, Book
from elibrary.services.availability import availability_of, recalculate_availability
from elibrary.services.validation import GENRE_MESSAGE, raise_for_errors, validate_book

logger = logging.getLogger("elibrary.books")

WRITABLE_FIELDS = ("title", "author", "genre", "isbn", "description", "copies")

# public sort key -> column
SORT_FIELDS = {
    "title": Book.title,
    "author": Book.author,
    "genre": Book.genre,
    "isbn": Book.isbn,
    "copies": Book.copies,
    "available": Book.available,
    "createdAt": Book.created_at,
    "updatedAt": Book.updated_at,
}


def _commit_or_duplicate(db: Session, isbn: Optional[str]) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateKeyError("isbn", isbn)


def create_book(db: Session, fields: Dict[str, Any]) -> Book:
    raise_for_errors(validate_book(fields))
    book = Book(
        title=fields["title"].strip(),
        author=fields["author"].strip(),
        genre=fields["genre"],
        isbn=fields["isbn"],
        description=fields.get("description") or "",
        copies=fields["copies"],
        available=availability_of(fields["copies"]),
    )
    db.add(book)
    _commit_or_duplicate(db, book.isbn)
    db.refresh(book)
    logger.info(f"Created book id={book.id} title={book.title}")
    return book


def get_book(db: Session, book_id: str) -> Book:
    book = db.get(Book, book_id)
    if not book:
        raise NotFoundError("Book", book_id)
    return book


def list_books(db: Session, genre: Optional[str] = None, sort_by: str = "createdAt",
               sort: str = "asc", limit: int = 10) -> List[Book]:
    errors = []
    if genre is not None and genre not in GENRES:
        errors.append(FieldError("filter", GENRE_MESSAGE))
    if sort_by not in SORT_FIELDS:
        errors.append(FieldError("sortBy", "sortBy must be one of: " + ", ".join(SORT_FIELDS)))
    if sort not in ("asc", "desc"):
        errors.append(FieldError("sort", "sort must be asc or desc"))
    if limit < 1:
        errors.append(FieldError("limit", "limit must be at least 1"))
    raise_for_errors(errors)

    query = db.query(Book)
    if genre:
        query = query.filter(Book.genre == genre)
    column = SORT_FIELDS[sort_by]
    # id breaks ties so equal keys come back in a stable order
    order = (column.desc(), Book.id.desc()) if sort == "desc" else (column.asc(), Book.id.asc())
    return query.order_by(*order).limit(limit).all()


def update_book(db: Session, book_id: str, changes: Dict[str, Any]) -> Book:
    book = get_book(db, book_id)
    unknown = [k for k in changes if k not in WRITABLE_FIELDS]
    if unknown:
        raise ValidationError([FieldError(k, f"{k} cannot be updated") for k in unknown])
    raise_for_errors(validate_book(changes, partial=True))

    for k, v in changes.items():
        if k in ("title", "author"):
            v = v.strip()
        elif k == "description" and v is None:
            v = ""
        setattr(book, k, v)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise DuplicateKeyError("isbn", changes.get("isbn"))
    if "copies" in changes:
        recalculate_availability(db, book.id)
    _commit_or_duplicate(db, changes.get("isbn"))
    db.refresh(book)
    logger.info(f"Updated book id={book.id}")
    return book


def delete_book(db: Session, book_id: str) -> None:
    book = get_book(db, book_id)
    db.delete(book)
    db.commit()
    logger.info(f"Deleted book id={book_id}")
