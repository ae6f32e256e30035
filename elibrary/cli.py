import argparse
import logging

from elibrary.core.config import Settings
from elibrary.core.database import Database
from elibrary.main import configure_logging
from elibrary.models.models import Book
from elibrary.services import books

logger = logging.getLogger("elibrary.cli")

SAMPLE_BOOKS = [
    {"title": "Data Engineering with Python", "author": "J. Reader", "genre": "SCIENCE",
     "isbn": "978-1111111111", "copies": 3},
    {"title": "Designing Data-Intensive Applications", "author": "Martin Kleppmann", "genre": "SCIENCE",
     "isbn": "978-0980000000", "copies": 2},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "FANTASY",
     "isbn": "978-0547928227", "copies": 4},
]


def seed(database: Database) -> int:
    """Insert the sample catalog unless books already exist. Returns rows added."""
    with database.session() as db:
        if db.query(Book).count() > 0:
            logger.info("Catalog not empty, skipping seed")
            return 0
        for fields in SAMPLE_BOOKS:
            books.create_book(db, dict(fields))
    logger.info('Seeded sample data')
    return len(SAMPLE_BOOKS)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description='E-Library small utilities')
    parser.add_argument('--initdb', action='store_true', help='Create tables')
    parser.add_argument('--seed', action='store_true', help='Seed sample data')
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logging(settings.log_level)
    database = Database(settings.database_url, echo=settings.sql_echo)
    try:
        if args.initdb or args.seed:
            database.create_all()
        if args.seed:
            seed(database)
    finally:
        database.dispose()
    print('Done')


if __name__ == '__main__':
    main()
