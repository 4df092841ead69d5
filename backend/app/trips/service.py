"""Trip service - trip lifecycle, admin lock and cascading delete."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from backend.app.audit import record_audit_fact
from backend.app.db.context import RequestContext
from backend.app.db.engine import atomic
from backend.app.db.models import Trip
from backend.app.db.queries import ensure_can_edit, ensure_can_view, get_trip_graph
from backend.app.db.repositories import AuditRecorder
from backend.app.errors import ForbiddenError, ValidationError
from backend.app.models.common import TripStatus
from backend.app.models.trip import TripCreate, TripRead, TripUpdate
from backend.app.trips.projections import trip_to_read

logger = logging.getLogger(__name__)


class TripService:
    """Manages trip creation, retrieval, deletion and locking."""

    def __init__(self, session: Session, audit: AuditRecorder) -> None:
        self._session = session
        self._audit = audit

    def create_trip(self, data: TripCreate, ctx: RequestContext) -> TripRead:
        """Create a new trip owned by the actor.

        Args:
            data: Validated trip creation data
            ctx: Request context

        Returns:
            Created trip
        """
        trip = Trip(
            owner_id=ctx.user_id,
            name=data.name,
            description=data.description,
            cover_image=data.cover_image or None,
            start_date=data.start_date,
            end_date=data.end_date,
            status=TripStatus.planning.value,
            is_locked=False,
        )
        with atomic(self._session, "create_trip"):
            self._session.add(trip)

        return trip_to_read(trip, ctx)

    def get_trip(self, trip_id: uuid.UUID, ctx: RequestContext) -> TripRead:
        """Get a trip as its owner or an admin sees it."""
        trip = get_trip_graph(self._session, trip_id)
        ensure_can_view(trip, ctx)
        return trip_to_read(trip, ctx)

    def update_trip(self, trip_id: uuid.UUID, data: TripUpdate, ctx: RequestContext) -> TripRead:
        """Edit a trip's core fields.

        Args:
            trip_id: Trip ID
            data: Fields to change; unset fields are left alone
            ctx: Request context

        Returns:
            Updated trip

        Raises:
            NotFoundError: If the trip does not exist
            ForbiddenError: If the actor is neither owner nor admin, or a
                non-admin sets admin_notes
            LockedTripError: If the owner edits a locked trip
            ValidationError: If the new dates are out of order or leave a stop
                outside the trip range
        """
        trip = get_trip_graph(self._session, trip_id)
        ensure_can_edit(trip, ctx)

        changes = data.model_dump(exclude_unset=True)
        if "admin_notes" in changes and not ctx.is_admin:
            raise ForbiddenError("Only admins can set admin notes")

        start_date = changes.get("start_date", trip.start_date)
        end_date = changes.get("end_date", trip.end_date)
        if end_date <= start_date:
            raise ValidationError("end_date must be after start_date", field="end_date")

        for index, stop in enumerate(sorted(trip.stops, key=lambda s: s.order)):
            if stop.start_date < start_date or stop.end_date > end_date:
                raise ValidationError(
                    "Trip dates must still cover every stop",
                    field="start_date" if stop.start_date < start_date else "end_date",
                    index=index,
                )

        if "status" in changes:
            changes["status"] = changes["status"].value

        with atomic(self._session, "update_trip"):
            for field, value in changes.items():
                setattr(trip, field, value)

        logger.info(
            "Trip updated",
            extra={"structured": {"trip_id": str(trip_id), "fields": sorted(changes)}},
        )

        if ctx.is_admin and not ctx.owns(trip.owner_id):
            record_audit_fact(
                self._audit,
                action="trip_edited",
                entity_type="trip",
                entity_id=trip_id,
                actor_id=ctx.user_id,
                detail=f"Edited trip: {trip.name}",
            )

        return trip_to_read(trip, ctx)

    def list_trips(self, ctx: RequestContext, limit: int = 50) -> list[TripRead]:
        """List the actor's trips, latest start date first."""
        trips = (
            self._session.execute(
                select(Trip)
                .where(Trip.owner_id == ctx.user_id)
                .options(selectinload(Trip.shared_trip))
                .order_by(Trip.start_date.desc())
                .limit(limit)
            )
            .scalars()
            .all()
        )
        return [trip_to_read(t, ctx) for t in trips]

    def delete_trip(self, trip_id: uuid.UUID, ctx: RequestContext) -> None:
        """Delete a trip with its stops, activities, expenses and share link.

        Raises:
            NotFoundError: If the trip does not exist
            ForbiddenError: If the actor is neither owner nor admin
            LockedTripError: If the owner deletes a locked trip
        """
        trip = get_trip_graph(self._session, trip_id)
        ensure_can_edit(trip, ctx)
        name = trip.name

        with atomic(self._session, "delete_trip"):
            self._session.delete(trip)

        logger.info("Trip deleted", extra={"structured": {"trip_id": str(trip_id)}})

        if ctx.is_admin and not ctx.owns(trip.owner_id):
            record_audit_fact(
                self._audit,
                action="trip_deleted",
                entity_type="trip",
                entity_id=trip_id,
                actor_id=ctx.user_id,
                detail=f"Deleted trip: {name}",
            )

    def set_locked(self, trip_id: uuid.UUID, locked: bool, ctx: RequestContext) -> TripRead:
        """Lock or unlock a trip (admin only)."""
        if not ctx.is_admin:
            raise ForbiddenError("Locking trips requires admin access")

        trip = get_trip_graph(self._session, trip_id)

        with atomic(self._session, "lock_trip" if locked else "unlock_trip"):
            trip.is_locked = locked

        record_audit_fact(
            self._audit,
            action="trip_locked" if locked else "trip_unlocked",
            entity_type="trip",
            entity_id=trip_id,
            actor_id=ctx.user_id,
            detail=f"{'Locked' if locked else 'Unlocked'} trip: {trip.name}",
        )
        return trip_to_read(trip, ctx)
