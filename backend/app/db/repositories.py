"""Protocol interfaces for the engine's external collaborators."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class CityRecord:
    """Catalog city data consumed by the cost estimator."""

    city_id: UUID
    name: str
    country: str
    cost_index: float


@dataclass(frozen=True)
class AttractionRecord:
    """Catalog attraction data consumed by the itinerary store."""

    attraction_id: UUID
    name: str
    cost: float
    type: str


@dataclass(frozen=True)
class AuditFact:
    """Write-once fact about a privileged mutation."""

    action: str
    entity_type: str
    entity_id: str
    actor_id: UUID
    detail: str
    timestamp: datetime


class CatalogReader(Protocol):
    """Read-only source of city and attraction records."""

    def get_city(self, city_id: UUID) -> CityRecord | None:
        """Get city by ID.

        Args:
            city_id: City ID

        Returns:
            City record or None if not found
        """
        ...

    def get_attraction(self, attraction_id: UUID) -> AttractionRecord | None:
        """Get attraction by ID.

        Args:
            attraction_id: Attraction ID

        Returns:
            Attraction record or None if not found
        """
        ...


class AuditRecorder(Protocol):
    """Sink for audit facts; persistence is the implementation's concern."""

    def record(
        self,
        action: str,
        entity_type: str,
        entity_id: str,
        actor_id: UUID,
        detail: str,
    ) -> None:
        """Record an audit fact.

        Args:
            action: Action tag, e.g. "trip_duplicated"
            entity_type: Entity type, e.g. "trip"
            entity_id: Entity ID
            actor_id: Acting user ID
            detail: Free-text detail
        """
        ...
