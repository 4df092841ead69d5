"""Shared pytest fixtures for all test suites."""

import uuid
from collections.abc import Callable, Generator
from datetime import datetime

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from backend.app.config import Settings
from backend.app.db.context import RequestContext
from backend.app.db.engine import create_session_factory
from backend.app.db.inmemory import InMemoryAuditRecorder, InMemoryCatalogReader
from backend.app.db.models import Base, Trip

OWNER_ID = uuid.UUID("00000000-0000-0000-0000-00000000000a")
OTHER_ID = uuid.UUID("00000000-0000-0000-0000-00000000000b")
ADMIN_ID = uuid.UUID("00000000-0000-0000-0000-00000000000c")

TRIP_START = datetime(2026, 6, 1)
TRIP_END = datetime(2026, 6, 15)


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine shared across connections."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    """Session configured like the application's."""
    with create_session_factory(engine)() as session:
        yield session


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url="sqlite://")


@pytest.fixture
def catalog() -> InMemoryCatalogReader:
    return InMemoryCatalogReader()


@pytest.fixture
def audit() -> InMemoryAuditRecorder:
    return InMemoryAuditRecorder()


@pytest.fixture
def owner_ctx() -> RequestContext:
    return RequestContext(user_id=OWNER_ID)


@pytest.fixture
def other_ctx() -> RequestContext:
    return RequestContext(user_id=OTHER_ID)


@pytest.fixture
def admin_ctx() -> RequestContext:
    return RequestContext(user_id=ADMIN_ID, is_admin=True)


@pytest.fixture
def make_trip(session: Session) -> Callable[..., Trip]:
    """Factory persisting a bare trip row."""

    def _make(
        owner_id: uuid.UUID = OWNER_ID,
        name: str = "Summer in Europe",
        start_date: datetime = TRIP_START,
        end_date: datetime = TRIP_END,
        status: str = "planning",
        is_locked: bool = False,
        admin_notes: str | None = None,
    ) -> Trip:
        trip = Trip(
            owner_id=owner_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            status=status,
            is_locked=is_locked,
            admin_notes=admin_notes,
        )
        session.add(trip)
        session.commit()
        return trip

    return _make
