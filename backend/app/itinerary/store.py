"""Itinerary store - whole-itinerary replacement with ordering and date invariants."""

import logging
import uuid
from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from backend.app.audit import record_audit_fact
from backend.app.db.context import RequestContext
from backend.app.db.engine import atomic
from backend.app.db.models import Trip, TripActivity, TripStop
from backend.app.db.queries import ensure_can_edit, ensure_can_view, get_trip_graph
from backend.app.db.repositories import AuditRecorder, CatalogReader
from backend.app.errors import EngineError, ValidationError
from backend.app.models.common import ActivityType
from backend.app.models.itinerary import ActivityInput, StopInput
from backend.app.models.trip import StopRead
from backend.app.trips.projections import stops_to_read
from backend.app.utils.metrics import itinerary_replacements_total

logger = logging.getLogger(__name__)


class ItineraryStore:
    """Holds a trip's ordered stops and their activities.

    Every mutation replaces the full stop set: existing stops and activities
    are discarded and the submitted list is persisted with order forced to
    its list position. Concurrent replacements of the same trip are
    last-writer-wins.
    """

    def __init__(self, session: Session, catalog: CatalogReader, audit: AuditRecorder) -> None:
        self._session = session
        self._catalog = catalog
        self._audit = audit

    def get_itinerary(self, trip_id: uuid.UUID, ctx: RequestContext) -> list[StopRead]:
        """Get a trip's stops in order with their activities."""
        trip = get_trip_graph(self._session, trip_id)
        ensure_can_view(trip, ctx)
        return stops_to_read(trip.stops)

    def replace_itinerary(
        self, trip_id: uuid.UUID, stops: Sequence[StopInput], ctx: RequestContext
    ) -> list[TripStop]:
        """Atomically replace a trip's full stop set.

        Args:
            trip_id: Trip ID
            stops: New stops in itinerary order
            ctx: Request context (actor and admin flag)

        Returns:
            Persisted stops, order 1..N

        Raises:
            NotFoundError: If the trip does not exist
            ForbiddenError: If the actor is neither owner nor admin
            LockedTripError: If a non-admin edits a locked trip
            ValidationError: If any stop or activity is invalid
        """
        try:
            trip = get_trip_graph(self._session, trip_id)
            ensure_can_edit(trip, ctx)
            activity_rows = self._validate(trip, stops)

            with atomic(self._session, "replace_itinerary"):
                trip.stops.clear()
                # Old rows must be gone before the new ones reuse their order/city slots
                self._session.flush()

                for position, (stop, activities) in enumerate(zip(stops, activity_rows), start=1):
                    trip.stops.append(
                        TripStop(
                            city_id=stop.city_id,
                            order=position,
                            start_date=stop.start_date,
                            end_date=stop.end_date,
                            notes=stop.notes,
                            activities=[TripActivity(**row) for row in activities],
                        )
                    )
        except EngineError as e:
            itinerary_replacements_total.labels(outcome=e.error_code.value.lower()).inc()
            raise

        itinerary_replacements_total.labels(outcome="success").inc()
        logger.info(
            f"Itinerary replaced for trip {trip_id}",
            extra={
                "structured": {
                    "trip_id": str(trip_id),
                    "actor_id": str(ctx.user_id),
                    "stops": len(stops),
                }
            },
        )

        if ctx.is_admin and not ctx.owns(trip.owner_id):
            record_audit_fact(
                self._audit,
                action="trip_itinerary_updated",
                entity_type="trip",
                entity_id=trip.trip_id,
                actor_id=ctx.user_id,
                detail=f"Updated itinerary for trip: {trip.name} ({len(stops)} stops)",
            )

        return list(trip.stops)

    def _validate(self, trip: Trip, stops: Sequence[StopInput]) -> list[list[dict[str, Any]]]:
        """Check every precondition and resolve activity rows.

        Nothing is written here; the first violation raises.
        """
        seen_cities: dict[uuid.UUID, int] = {}
        resolved: list[list[dict[str, Any]]] = []

        for index, stop in enumerate(stops):
            prefix = f"stops[{index}]"

            if self._catalog.get_city(stop.city_id) is None:
                raise ValidationError(
                    f"Unknown city {stop.city_id}", field=f"{prefix}.city_id", index=index
                )

            if stop.city_id in seen_cities:
                raise ValidationError(
                    f"City already used by stop {seen_cities[stop.city_id]}",
                    field=f"{prefix}.city_id",
                    index=index,
                )
            seen_cities[stop.city_id] = index

            if stop.end_date <= stop.start_date:
                raise ValidationError(
                    "end_date must be after start_date", field=f"{prefix}.end_date", index=index
                )

            if stop.start_date < trip.start_date:
                raise ValidationError(
                    "Stop starts before the trip", field=f"{prefix}.start_date", index=index
                )

            if stop.end_date > trip.end_date:
                raise ValidationError(
                    "Stop ends after the trip", field=f"{prefix}.end_date", index=index
                )

            resolved.append(
                [
                    self._resolve_activity(activity, f"{prefix}.activities[{position}]", index)
                    for position, activity in enumerate(stop.activities)
                ]
            )

        return resolved

    def _resolve_activity(self, activity: ActivityInput, path: str, index: int) -> dict[str, Any]:
        """Build activity column values, filling gaps from the catalog attraction."""
        name = activity.name
        cost = activity.cost
        activity_type = activity.type

        if activity.attraction_id is not None:
            attraction = self._catalog.get_attraction(activity.attraction_id)
            if attraction is None:
                raise ValidationError(
                    f"Unknown attraction {activity.attraction_id}",
                    field=f"{path}.attraction_id",
                    index=index,
                )
            name = name or attraction.name
            cost = cost if cost is not None else attraction.cost
            if activity_type is None and attraction.type in ActivityType.__members__:
                activity_type = ActivityType(attraction.type)

        if not name:
            raise ValidationError("Custom activity requires a name", field=f"{path}.name", index=index)

        return {
            "attraction_id": activity.attraction_id,
            "name": name,
            "description": activity.description,
            "type": (activity_type or ActivityType.other).value,
            "cost": cost or 0.0,
            "duration": activity.duration,
            "date": activity.date,
            "time": activity.time,
            "notes": activity.notes,
        }
