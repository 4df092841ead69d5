"""Map ORM rows to read models."""

from backend.app.db.context import RequestContext
from backend.app.db.models import Trip, TripActivity, TripStop
from backend.app.models.common import ActivityType, TripStatus
from backend.app.models.trip import ActivityRead, StopRead, TripRead


def activity_to_read(activity: TripActivity) -> ActivityRead:
    """Convert an activity row."""
    return ActivityRead(
        id=activity.activity_id,
        attraction_id=activity.attraction_id,
        name=activity.name,
        description=activity.description,
        type=ActivityType(activity.type),
        cost=activity.cost,
        duration=activity.duration,
        date=activity.date,
        time=activity.time,
        notes=activity.notes,
        is_custom=activity.is_custom,
    )


def stop_to_read(stop: TripStop) -> StopRead:
    """Convert a stop row with its activities."""
    return StopRead(
        id=stop.stop_id,
        city_id=stop.city_id,
        order=stop.order,
        start_date=stop.start_date,
        end_date=stop.end_date,
        notes=stop.notes,
        activities=[activity_to_read(a) for a in stop.activities],
    )


def stops_to_read(stops: list[TripStop]) -> list[StopRead]:
    """Convert stops in itinerary order."""
    return [stop_to_read(s) for s in sorted(stops, key=lambda s: s.order)]


def trip_to_read(trip: Trip, ctx: RequestContext) -> TripRead:
    """Convert a trip row; admin notes are included for admins only."""
    return TripRead(
        id=trip.trip_id,
        owner_id=trip.owner_id,
        name=trip.name,
        description=trip.description,
        cover_image=trip.cover_image,
        start_date=trip.start_date,
        end_date=trip.end_date,
        status=TripStatus(trip.status),
        is_locked=trip.is_locked,
        share_id=trip.share_id,
        admin_notes=trip.admin_notes if ctx.is_admin else None,
        created_at=trip.created_at,
    )
