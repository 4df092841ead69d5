"""Dev seeding helper for the read-only city/attraction catalog."""

import uuid

from sqlalchemy import select

from backend.app.db.engine import get_session_factory
from backend.app.db.models import Attraction, City

# Fixed IDs so dev itineraries can reference them across runs
PARIS_ID = uuid.UUID("00000000-0000-0000-0000-000000000101")
KYOTO_ID = uuid.UUID("00000000-0000-0000-0000-000000000102")
LISBON_ID = uuid.UUID("00000000-0000-0000-0000-000000000103")

DEV_CITIES: list[tuple[uuid.UUID, str, str, float]] = [
    (PARIS_ID, "Paris", "France", 180.0),
    (KYOTO_ID, "Kyoto", "Japan", 140.0),
    (LISBON_ID, "Lisbon", "Portugal", 95.0),
]

DEV_ATTRACTIONS: list[tuple[uuid.UUID, str, str, float]] = [
    (PARIS_ID, "Louvre Museum", "sightseeing", 22.0),
    (PARIS_ID, "Seine River Cruise", "relaxation", 18.0),
    (KYOTO_ID, "Fushimi Inari Shrine", "sightseeing", 0.0),
    (KYOTO_ID, "Kaiseki Dinner", "dining", 120.0),
    (LISBON_ID, "Tram 28", "sightseeing", 3.0),
]


def seed_dev_catalog() -> None:
    """Seed dev catalog cities and attractions.

    Idempotent: cities already present (by id) are left alone together
    with their attractions.
    """
    with get_session_factory()() as session:
        for city_id, name, country, cost_index in DEV_CITIES:
            existing = session.execute(
                select(City).where(City.city_id == city_id)
            ).scalar_one_or_none()
            if existing:
                print(f"City already exists: {existing.name}")
                continue

            print(f"Creating city {name}...")
            session.add(City(city_id=city_id, name=name, country=country, cost_index=cost_index))
            session.add_all(
                Attraction(city_id=city_id, name=a_name, type=a_type, cost=a_cost)
                for a_city, a_name, a_type, a_cost in DEV_ATTRACTIONS
                if a_city == city_id
            )

        session.commit()
        print("Dev seeding complete")


if __name__ == "__main__":
    seed_dev_catalog()
