from __future__ import annotations

import os
from datetime import datetime, timedelta
from typing import Iterator

# Tests always run on the shared in-memory database, never on a configured file: the
# schema is dropped before every test. Set before the engine is built at import time.
os.environ["SHAREIT_DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

import pytest
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from shareit.core import clock as service_clock
from shareit.infrastructure.database import Base, SessionLocal, engine
from shareit.main import app
from shareit.tests.fakes import (
    InMemoryBookingRepository,
    InMemoryCommentRepository,
    InMemoryItemRepository,
    InMemoryUserRepository,
)

NOW = datetime(2030, 6, 15, 12, 0, 0)


@pytest.fixture(autouse=True)
def _fresh_schema() -> Iterator[None]:
    """
    Every test starts from empty tables in the shared in-memory database.
    """
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def clock(monkeypatch: pytest.MonkeyPatch):
    """
    Pins "now" for request validation and every use case. Call `clock.set(dt)` to move it.
    """

    class _Clock:
        def __init__(self) -> None:
            self.now = NOW

        def __call__(self) -> datetime:
            return self.now

        def set(self, value: datetime) -> None:
            self.now = value

        def advance(self, delta: timedelta) -> None:
            self.now += delta

    pinned = _Clock()
    monkeypatch.setattr(service_clock, "current", pinned)
    return pinned


@pytest.fixture()
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def item_repo() -> InMemoryItemRepository:
    return InMemoryItemRepository()


@pytest.fixture()
def booking_repo(item_repo: InMemoryItemRepository) -> InMemoryBookingRepository:
    return InMemoryBookingRepository(item_repo)


@pytest.fixture()
def comment_repo(user_repo: InMemoryUserRepository) -> InMemoryCommentRepository:
    return InMemoryCommentRepository(user_repo)
