from typing import Iterator, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from elibrary.schemas import schemas
from elibrary.services import books, borrows

router = APIRouter(prefix="/api")


def get_db(request: Request) -> Iterator[Session]:
    with request.app.state.db.session() as db:
        yield db


def get_list_limit(request: Request) -> int:
    return request.app.state.settings.list_limit


@router.post("/books", response_model=schemas.BookOut, status_code=201)
def create_book(book_in: schemas.BookCreate, db: Session = Depends(get_db)):
    return books.create_book(db, book_in.model_dump())


@router.get("/books", response_model=List[schemas.BookOut])
def list_books(genre: Optional[str] = Query(None, alias="filter", description="genre to match"),
               sort_by: str = Query("createdAt", alias="sortBy"),
               sort: str = Query("asc"),
               limit: Optional[int] = Query(None),
               default_limit: int = Depends(get_list_limit),
               db: Session = Depends(get_db)):
    return books.list_books(db, genre=genre, sort_by=sort_by, sort=sort,
                            limit=default_limit if limit is None else limit)


@router.get("/books/{book_id}", response_model=schemas.BookOut)
def read_book(book_id: str, db: Session = Depends(get_db)):
    return books.get_book(db, book_id)


@router.put("/books/{book_id}", response_model=schemas.BookOut)
def update_book(book_id: str, book_upd: schemas.BookUpdate, db: Session = Depends(get_db)):
    return books.update_book(db, book_id, book_upd.model_dump(exclude_unset=True))


@router.delete("/books/{book_id}")
def delete_book(book_id: str, db: Session = Depends(get_db)):
    books.delete_book(db, book_id)
    return {"ok": True}


@router.post("/borrow", response_model=schemas.BorrowOut, status_code=201)
def borrow_book(borrow_in: schemas.BorrowCreate, db: Session = Depends(get_db)):
    return borrows.borrow_book(db, borrow_in.book, borrow_in.quantity, borrow_in.due_date)


@router.get("/borrow", response_model=List[schemas.BorrowSummaryOut])
def borrow_summary(db: Session = Depends(get_db)):
    return borrows.borrow_summary(db)


@router.get("/borrow/records", response_model=List[schemas.BorrowOut])
def list_borrows(book: Optional[str] = None, limit: Optional[int] = Query(None, ge=1),
                 db: Session = Depends(get_db)):
    return borrows.list_borrows(db, book_id=book, limit=limit)
