"""In-memory implementations of collaborator interfaces."""

import uuid

from backend.app.db.repositories import AttractionRecord, AuditFact, CityRecord
from backend.app.models.common import utcnow


class InMemoryCatalogReader:
    """In-memory implementation of CatalogReader."""

    def __init__(self) -> None:
        self._cities: dict[uuid.UUID, CityRecord] = {}
        self._attractions: dict[uuid.UUID, AttractionRecord] = {}

    def add_city(
        self, name: str, country: str, cost_index: float, city_id: uuid.UUID | None = None
    ) -> CityRecord:
        """Register a city and return its record."""
        record = CityRecord(
            city_id=city_id or uuid.uuid4(),
            name=name,
            country=country,
            cost_index=cost_index,
        )
        self._cities[record.city_id] = record
        return record

    def add_attraction(
        self,
        name: str,
        cost: float,
        type: str = "sightseeing",
        attraction_id: uuid.UUID | None = None,
    ) -> AttractionRecord:
        """Register an attraction and return its record."""
        record = AttractionRecord(
            attraction_id=attraction_id or uuid.uuid4(),
            name=name,
            cost=cost,
            type=type,
        )
        self._attractions[record.attraction_id] = record
        return record

    def get_city(self, city_id: uuid.UUID) -> CityRecord | None:
        """Get city by ID."""
        return self._cities.get(city_id)

    def get_attraction(self, attraction_id: uuid.UUID) -> AttractionRecord | None:
        """Get attraction by ID."""
        return self._attractions.get(attraction_id)


class InMemoryAuditRecorder:
    """In-memory implementation of AuditRecorder."""

    def __init__(self) -> None:
        self.facts: list[AuditFact] = []

    def record(
        self,
        action: str,
        entity_type: str,
        entity_id: str,
        actor_id: uuid.UUID,
        detail: str,
    ) -> None:
        """Append an audit fact."""
        self.facts.append(
            AuditFact(
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                actor_id=actor_id,
                detail=detail,
                timestamp=utcnow(),
            )
        )

    def actions(self) -> list[str]:
        """Return recorded action tags in order."""
        return [fact.action for fact in self.facts]
