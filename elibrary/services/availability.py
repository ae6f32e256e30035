import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from elibrary.core.errors import InternalError
from elibrary.models.models import Book

logger = logging.getLogger("elibrary.availability")


def availability_of(copies):
    """A book is available while at least one copy is on the shelf.

    Works on a plain int as well as on a SQL column expression, so the same
    rule can be embedded in an UPDATE statement.
    """
    return copies > 0


def recalculate_availability(db: Session, book_id: str) -> None:
    """Re-derive ``available`` from the stored ``copies`` of one book.

    Runs inside the caller's transaction; the caller commits. A missing book
    means the caller held a dead reference, which is a consistency fault.
    """
    result = db.execute(
        update(Book)
        .where(Book.id == book_id)
        .values(available=availability_of(Book.copies))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.error(f"Availability recalculation for missing book {book_id}")
        raise InternalError(f"Book {book_id} vanished during availability recalculation")
