import logging
from datetime import datetime
from numbers import Number
from typing import Any, Dict, List, Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from elibrary.core.errors import InsufficientStockError, NotFoundError
from elibrary.models.models import Book, Borrow, utcnow
from elibrary.services.availability import availability_of
from elibrary.services.books import get_book
from elibrary.services.validation import as_utc, raise_for_errors, validate_borrow

logger = logging.getLogger("elibrary.borrows")


def borrow_book(db: Session, book_id: str, quantity: Any, due_date: Any,
                now: Optional[datetime] = None) -> Borrow:
    """Lend ``quantity`` copies of a book and record the loan.

    The stock check and the decrement are a single conditional UPDATE, so two
    concurrent borrows can never both take the last copies. The borrow row is
    inserted in the same transaction.
    """
    book = get_book(db, book_id)
    if isinstance(quantity, Number) and not isinstance(quantity, bool) and quantity > book.copies:
        logger.warning(f"Rejected borrow of {quantity} from book {book_id}: {book.copies} in stock")
        raise InsufficientStockError(book_id, quantity, book.copies)
    raise_for_errors(validate_borrow(quantity, due_date, now=now))

    remaining = Book.copies - quantity
    result = db.execute(
        update(Book)
        .where(Book.id == book_id, Book.copies >= quantity)
        .values(copies=remaining, available=availability_of(remaining), updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        # lost a race: someone else took the stock, or deleted the book
        current = db.get(Book, book_id)
        if current is None:
            raise NotFoundError("Book", book_id)
        logger.warning(f"Rejected borrow of {quantity} from book {book_id}: stock changed concurrently")
        raise InsufficientStockError(book_id, quantity, current.copies)

    borrow = Borrow(book_id=book_id, quantity=quantity, due_date=as_utc(due_date))
    db.add(borrow)
    db.commit()
    db.refresh(borrow)
    logger.info(f"Book {book_id} borrowed: quantity={quantity} borrow={borrow.id}")
    return borrow


def get_borrow(db: Session, borrow_id: str) -> Borrow:
    borrow = db.get(Borrow, borrow_id)
    if not borrow:
        raise NotFoundError("Borrow", borrow_id)
    return borrow


def list_borrows(db: Session, book_id: Optional[str] = None, limit: Optional[int] = None) -> List[Borrow]:
    query = db.query(Borrow)
    if book_id:
        query = query.filter(Borrow.book_id == book_id)
    query = query.order_by(Borrow.created_at.desc(), Borrow.id)
    if limit:
        query = query.limit(limit)
    return query.all()


def borrow_summary(db: Session) -> List[Dict[str, Any]]:
    """Lifetime borrowed quantity per book still present in the catalog."""
    total = func.sum(Borrow.quantity).label("total_quantity")
    rows = (
        db.query(Book.title, Book.isbn, total)
        .select_from(Borrow)
        .join(Book, Book.id == Borrow.book_id)
        .group_by(Borrow.book_id, Book.title, Book.isbn)
        .all()
    )
    return [
        {"book": {"title": r.title, "isbn": r.isbn}, "totalQuantity": int(r.total_quantity)}
        for r in rows
    ]
