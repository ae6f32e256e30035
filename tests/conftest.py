from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from elibrary.core.config import Settings
from elibrary.core.database import Database
from elibrary.main import create_app


def make_book(**overrides):
    book = {
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "genre": "FANTASY",
        "isbn": "978-0547928227",
        "description": "There and back again",
        "copies": 3,
    }
    book.update(overrides)
    return book


def future(days=7):
    return datetime.now(timezone.utc) + timedelta(days=days)


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite:///{tmp_path / 'test.db'}", log_level="WARNING")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def database(settings):
    database = Database(settings.database_url)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    with database.session() as session:
        yield session
