"""Fixtures for API tests against an in-memory SQLite database."""

import uuid
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from backend.app.db.engine import create_session_factory, get_session
from backend.app.db.models import Attraction, City
from backend.app.main import app

CATALOG_IDS = {
    "paris": uuid.UUID("00000000-0000-0000-0000-000000000101"),
    "lyon": uuid.UUID("00000000-0000-0000-0000-000000000102"),
    "louvre": uuid.UUID("00000000-0000-0000-0000-000000000201"),
}


@pytest.fixture
def catalog_ids() -> dict[str, uuid.UUID]:
    """IDs of the seeded catalog rows."""
    return CATALOG_IDS


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient, None, None]:
    """Test client whose sessions are bound to the test engine, with a seeded catalog."""
    factory = create_session_factory(engine)

    with factory() as session:
        session.add_all(
            [
                City(city_id=CATALOG_IDS["paris"], name="Paris", country="France", cost_index=100.0),
                City(city_id=CATALOG_IDS["lyon"], name="Lyon", country="France", cost_index=50.0),
                Attraction(
                    attraction_id=CATALOG_IDS["louvre"],
                    city_id=CATALOG_IDS["paris"],
                    name="Louvre",
                    type="sightseeing",
                    cost=22.0,
                ),
            ]
        )
        session.commit()

    def override_get_session() -> Generator[Session, None, None]:
        session = factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
