"""Trip lookup and access-check helpers shared by the engine services."""

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from backend.app.db.context import RequestContext
from backend.app.db.models import SharedTrip, Trip, TripStop
from backend.app.errors import ForbiddenError, LockedTripError, NotFoundError


def get_trip_graph(session: Session, trip_id: uuid.UUID) -> Trip:
    """Load a trip with its stops, activities, expenses and share link.

    Args:
        session: SQLAlchemy session
        trip_id: Trip ID

    Returns:
        Trip with relationships eagerly loaded

    Raises:
        NotFoundError: If the trip does not exist
    """
    trip = session.execute(
        select(Trip)
        .where(Trip.trip_id == trip_id)
        .options(
            selectinload(Trip.stops).selectinload(TripStop.activities),
            selectinload(Trip.expenses),
            selectinload(Trip.shared_trip),
        )
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()

    if trip is None:
        raise NotFoundError("trip", trip_id)

    return trip


def get_shared_trip(session: Session, share_id: str) -> SharedTrip:
    """Load a share link by its public token.

    Raises:
        NotFoundError: If no link carries this token
    """
    shared = session.execute(
        select(SharedTrip).where(SharedTrip.share_id == share_id)
    ).scalar_one_or_none()

    if shared is None:
        raise NotFoundError("share", share_id)

    return shared


def ensure_can_view(trip: Trip, ctx: RequestContext) -> None:
    """Owner or admin may view a trip directly."""
    if not ctx.owns(trip.owner_id) and not ctx.is_admin:
        raise ForbiddenError("Only the trip owner can access this trip")


def ensure_can_edit(trip: Trip, ctx: RequestContext) -> None:
    """Owner may edit an unlocked trip; admins bypass the lock."""
    ensure_can_view(trip, ctx)
    if trip.is_locked and not ctx.is_admin:
        raise LockedTripError(trip.trip_id)


def ensure_owner(trip: Trip, ctx: RequestContext) -> None:
    """Only the trip owner passes, admins included."""
    if not ctx.owns(trip.owner_id):
        raise ForbiddenError("Only the trip owner can manage this trip")
