"""SQL implementations of collaborator interfaces."""

import uuid

from sqlalchemy.orm import Session

from backend.app.db.models import Attraction, AuditLog, City
from backend.app.db.repositories import AttractionRecord, CityRecord
from backend.app.models.common import utcnow


class SqlCatalogReader:
    """SQL implementation of CatalogReader over the read-only catalog tables."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_city(self, city_id: uuid.UUID) -> CityRecord | None:
        """Get city by ID."""
        city = self._session.get(City, city_id)

        if city is None:
            return None

        return CityRecord(
            city_id=city.city_id,
            name=city.name,
            country=city.country,
            cost_index=city.cost_index,
        )

    def get_attraction(self, attraction_id: uuid.UUID) -> AttractionRecord | None:
        """Get attraction by ID."""
        attraction = self._session.get(Attraction, attraction_id)

        if attraction is None:
            return None

        return AttractionRecord(
            attraction_id=attraction.attraction_id,
            name=attraction.name,
            cost=attraction.cost,
            type=attraction.type,
        )


class SqlAuditRecorder:
    """SQL implementation of AuditRecorder writing to the audit_log table.

    Runs its own commit after the audited mutation has already committed, so
    a failure here never undoes that mutation.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def record(
        self,
        action: str,
        entity_type: str,
        entity_id: str,
        actor_id: uuid.UUID,
        detail: str,
    ) -> None:
        """Persist an audit fact."""
        self._session.add(
            AuditLog(
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                actor_id=actor_id,
                detail=detail,
                timestamp=utcnow(),
            )
        )
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
