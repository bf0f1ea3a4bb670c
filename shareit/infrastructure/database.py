import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from .config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url


def make_engine(url: str, busy_timeout: float | None = None) -> Engine:
    """
    Engine for `url`. SQLite connections enforce foreign keys and wait up to
    `busy_timeout` seconds for another transaction's write lock before failing.

    An in-memory SQLite database lives as long as its connection, so every session
    shares that one connection and sees the others' uncommitted writes. Use it for
    tests only.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    connect_args: dict = {"check_same_thread": False}
    if busy_timeout is not None:
        connect_args["timeout"] = busy_timeout

    pool_options = {}
    if ":memory:" in url:
        logger.warning("In-memory database %s: single shared connection, for tests only", url)
        pool_options = {"poolclass": StaticPool}

    sqlite_engine = create_engine(url, connect_args=connect_args, **pool_options)

    @event.listens_for(sqlite_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return sqlite_engine


engine = make_engine(DATABASE_URL, settings.database_busy_timeout)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
Base = declarative_base()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    One use-case call is one transaction: commit when the block succeeds, roll back on
    any exception and re-raise it.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
