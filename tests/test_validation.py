from datetime import datetime, timedelta, timezone

from conftest import make_book
from elibrary.core.errors import FieldError
from elibrary.services.validation import as_utc, validate_book, validate_borrow


def test_valid_book_has_no_errors():
    assert validate_book(make_book()) == []


def test_missing_fields_use_their_messages():
    errors = validate_book({})
    assert errors == [
        FieldError("title", "Title is required"),
        FieldError("author", "Author is required"),
        FieldError("genre", "Genre is required"),
        FieldError("isbn", "ISBN is required"),
        FieldError("copies", "Copies field is required"),
    ]


def test_partial_ignores_absent_fields():
    assert validate_book({"description": "new blurb"}, partial=True) == []
    assert validate_book({"isbn": "12-34x"}, partial=True) == [
        FieldError("isbn", "ISBN 12-34x is not a valid format"),
    ]


def test_copies_must_be_whole_and_non_negative():
    assert validate_book({"copies": 2.5}, partial=True)[0].message == "Copies must be an integer"
    assert validate_book({"copies": -1}, partial=True)[0].message == "Copies must be a positive number"
    assert validate_book({"copies": 0}, partial=True) == []


def test_borrow_rules():
    now = datetime(2030, 5, 1, tzinfo=timezone.utc)
    assert validate_borrow(1, now + timedelta(days=1), now=now) == []
    assert validate_borrow(None, None, now=now) == [
        FieldError("quantity", "Quantity is required"),
        FieldError("dueDate", "Due date is required"),
    ]
    assert validate_borrow(1, "tomorrow", now=now)[0].field == "dueDate"


def test_as_utc_normalises_offsets():
    aware = datetime(2030, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert as_utc(aware) == datetime(2030, 1, 1, 12, 0)
    assert as_utc(datetime(2030, 1, 1)) == datetime(2030, 1, 1)


def test_isbn_is_ascii_digits_and_hyphens_only():
    assert validate_book({"isbn": "978-0547928227\n"}, partial=True)[0].field == "isbn"
    assert validate_book({"isbn": "١٢٣-4"}, partial=True)[0].field == "isbn"
    assert validate_book({"isbn": "978-0-547-92822-7"}, partial=True) == []
