import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text

from elibrary.core.database import Base

GENRES = ("FICTION", "NON_FICTION", "SCIENCE", "HISTORY", "BIOGRAPHY", "FANTASY")


def utcnow() -> datetime:
    """Naive UTC timestamp; every datetime column stores naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return uuid.uuid4().hex


class Book(Base):
    __tablename__ = "books"
    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String, nullable=False, index=True)
    author = Column(String, nullable=False, index=True)
    genre = Column(String(16), nullable=False, index=True)
    isbn = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    copies = Column(Integer, nullable=False)
    available = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Book id={self.id} isbn={self.isbn} copies={self.copies}>"


Index('ix_books_title_author', Book.title, Book.author)


class Borrow(Base):
    __tablename__ = "borrows"
    id = Column(String(32), primary_key=True, default=new_id)
    # plain reference: deleting a book neither cascades nor is blocked
    book_id = Column(String(32), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    due_date = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
