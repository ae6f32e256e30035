import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger("elibrary.database")

Base = declarative_base()


class Database:
    """Store handle: one engine plus a session factory.

    Opened by the application lifespan and disposed at shutdown; components
    receive it (or sessions made from it) explicitly.
    """

    def __init__(self, url: str, echo: bool = False):
        connect_args = {}
        if url.startswith("sqlite"):
            # sessions are handed across FastAPI's threadpool
            connect_args = {"check_same_thread": False}
        self.url = url
        self.engine = create_engine(url, echo=echo, connect_args=connect_args, pool_pre_ping=True)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        # models must be imported so their tables are registered on Base
        from elibrary.models import models  # noqa: F401

        logger.info("Creating database tables (if not present)...")
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        logger.info("Closing database connections")
        self.engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()
