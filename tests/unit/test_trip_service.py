"""Unit tests for trip lifecycle operations."""

import uuid
from collections.abc import Callable
from datetime import datetime

import pytest
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from backend.app.db.context import RequestContext
from backend.app.db.inmemory import InMemoryAuditRecorder
from backend.app.db.models import Expense, SharedTrip, Trip, TripActivity, TripStop
from backend.app.errors import ForbiddenError, LockedTripError, NotFoundError, ValidationError
from backend.app.models.common import TripStatus
from backend.app.models.trip import TripCreate, TripUpdate
from backend.app.trips.service import TripService


@pytest.fixture
def service(session: Session, audit: InMemoryAuditRecorder) -> TripService:
    return TripService(session, audit)


def _create(**overrides) -> TripCreate:
    data = {
        "name": "Lisbon long weekend",
        "start_date": datetime(2026, 9, 10),
        "end_date": datetime(2026, 9, 14),
    }
    data.update(overrides)
    return TripCreate(**data)


def test_create_trip_starts_in_planning(service: TripService, owner_ctx: RequestContext) -> None:
    trip = service.create_trip(_create(description="Pasteis"), owner_ctx)

    assert trip.owner_id == owner_ctx.user_id
    assert trip.status == TripStatus.planning
    assert trip.is_locked is False
    assert trip.share_id is None
    assert service.get_trip(trip.id, owner_ctx).description == "Pasteis"


def test_trip_dates_must_be_ordered() -> None:
    with pytest.raises(SchemaValidationError):
        _create(end_date=datetime(2026, 9, 9))


def test_list_trips_only_returns_own(
    service: TripService,
    make_trip: Callable[..., Trip],
    owner_ctx: RequestContext,
    other_ctx: RequestContext,
) -> None:
    make_trip(name="Mine")
    make_trip(owner_id=other_ctx.user_id, name="Theirs")

    assert [t.name for t in service.list_trips(owner_ctx)] == ["Mine"]


def test_get_trip_access(
    service: TripService,
    make_trip: Callable[..., Trip],
    owner_ctx: RequestContext,
    other_ctx: RequestContext,
    admin_ctx: RequestContext,
) -> None:
    trip = make_trip(admin_notes="watch this one")

    assert service.get_trip(trip.trip_id, owner_ctx).admin_notes is None
    assert service.get_trip(trip.trip_id, admin_ctx).admin_notes == "watch this one"
    with pytest.raises(ForbiddenError):
        service.get_trip(trip.trip_id, other_ctx)
    with pytest.raises(NotFoundError):
        service.get_trip(uuid.uuid4(), owner_ctx)


def test_delete_trip_cascades(
    service: TripService,
    session: Session,
    make_trip: Callable[..., Trip],
    owner_ctx: RequestContext,
) -> None:
    trip = make_trip()
    trip.stops.append(
        TripStop(
            city_id=uuid.uuid4(),
            order=1,
            start_date=datetime(2026, 6, 1),
            end_date=datetime(2026, 6, 2),
            activities=[TripActivity(name="Walk", cost=0.0)],
        )
    )
    trip.expenses.append(Expense(category="meals", amount=9.0, currency="USD", date=datetime(2026, 6, 1)))
    trip.shared_trip = SharedTrip(share_id="tok-delete")
    session.commit()

    service.delete_trip(trip.trip_id, owner_ctx)

    for model in (Trip, TripStop, TripActivity, Expense, SharedTrip):
        assert session.scalar(select(func.count()).select_from(model)) == 0


def test_admin_delete_of_foreign_trip_is_audited(
    service: TripService,
    audit: InMemoryAuditRecorder,
    make_trip: Callable[..., Trip],
    admin_ctx: RequestContext,
) -> None:
    trip = make_trip()

    service.delete_trip(trip.trip_id, admin_ctx)

    assert audit.actions() == ["trip_deleted"]


def test_lock_and_unlock(
    service: TripService,
    audit: InMemoryAuditRecorder,
    make_trip: Callable[..., Trip],
    owner_ctx: RequestContext,
    admin_ctx: RequestContext,
) -> None:
    trip = make_trip()

    with pytest.raises(ForbiddenError):
        service.set_locked(trip.trip_id, True, owner_ctx)

    assert service.set_locked(trip.trip_id, True, admin_ctx).is_locked is True
    assert service.get_trip(trip.trip_id, owner_ctx).is_locked is True
    assert service.set_locked(trip.trip_id, False, admin_ctx).is_locked is False
    assert audit.actions() == ["trip_locked", "trip_unlocked"]


def test_owner_cannot_delete_locked_trip(
    service: TripService,
    session: Session,
    make_trip: Callable[..., Trip],
    owner_ctx: RequestContext,
    admin_ctx: RequestContext,
) -> None:
    trip = make_trip(is_locked=True)

    with pytest.raises(LockedTripError):
        service.delete_trip(trip.trip_id, owner_ctx)

    assert session.scalar(select(func.count()).select_from(Trip)) == 1

    service.delete_trip(trip.trip_id, admin_ctx)

    assert session.scalar(select(func.count()).select_from(Trip)) == 0


class TestUpdateTrip:
    """Editing core trip fields."""

    def test_owner_updates_fields(
        self,
        service: TripService,
        audit: InMemoryAuditRecorder,
        make_trip: Callable[..., Trip],
        owner_ctx: RequestContext,
    ) -> None:
        trip = make_trip()

        updated = service.update_trip(
            trip.trip_id,
            TripUpdate(name="Renamed", status=TripStatus.ongoing, description=None),
            owner_ctx,
        )

        assert updated.name == "Renamed"
        assert updated.status == TripStatus.ongoing
        assert updated.start_date == trip.start_date
        assert service.get_trip(trip.trip_id, owner_ctx).status == TripStatus.ongoing
        assert audit.facts == []

    def test_only_admin_sets_admin_notes(
        self,
        service: TripService,
        audit: InMemoryAuditRecorder,
        make_trip: Callable[..., Trip],
        owner_ctx: RequestContext,
        admin_ctx: RequestContext,
    ) -> None:
        trip = make_trip()

        with pytest.raises(ForbiddenError):
            service.update_trip(trip.trip_id, TripUpdate(admin_notes="hi"), owner_ctx)

        updated = service.update_trip(
            trip.trip_id, TripUpdate(admin_notes="Flagged for review"), admin_ctx
        )

        assert updated.admin_notes == "Flagged for review"
        assert audit.actions() == ["trip_edited"]
        assert audit.facts[0].entity_id == str(trip.trip_id)

    def test_locked_trip_rejects_owner(
        self,
        service: TripService,
        make_trip: Callable[..., Trip],
        owner_ctx: RequestContext,
        admin_ctx: RequestContext,
    ) -> None:
        trip = make_trip(is_locked=True)

        with pytest.raises(LockedTripError):
            service.update_trip(trip.trip_id, TripUpdate(name="Nope"), owner_ctx)

        assert service.update_trip(trip.trip_id, TripUpdate(name="Admin fix"), admin_ctx).name == "Admin fix"

    def test_non_owner_forbidden(
        self,
        service: TripService,
        make_trip: Callable[..., Trip],
        other_ctx: RequestContext,
    ) -> None:
        trip = make_trip()

        with pytest.raises(ForbiddenError):
            service.update_trip(trip.trip_id, TripUpdate(name="Mine now"), other_ctx)

    def test_dates_must_stay_ordered(
        self,
        service: TripService,
        make_trip: Callable[..., Trip],
        owner_ctx: RequestContext,
    ) -> None:
        trip = make_trip(start_date=datetime(2026, 6, 1), end_date=datetime(2026, 6, 15))

        with pytest.raises(ValidationError) as exc_info:
            service.update_trip(trip.trip_id, TripUpdate(end_date=datetime(2026, 5, 30)), owner_ctx)

        assert exc_info.value.field == "end_date"
        assert service.get_trip(trip.trip_id, owner_ctx).end_date == datetime(2026, 6, 15)

    def test_dates_must_cover_stops(
        self,
        service: TripService,
        session: Session,
        make_trip: Callable[..., Trip],
        owner_ctx: RequestContext,
    ) -> None:
        trip = make_trip(start_date=datetime(2026, 6, 1), end_date=datetime(2026, 6, 15))
        trip.stops.append(
            TripStop(
                city_id=uuid.uuid4(),
                order=1,
                start_date=datetime(2026, 6, 10),
                end_date=datetime(2026, 6, 14),
            )
        )
        session.commit()

        with pytest.raises(ValidationError) as exc_info:
            service.update_trip(trip.trip_id, TripUpdate(end_date=datetime(2026, 6, 12)), owner_ctx)

        assert exc_info.value.field == "end_date"
        assert exc_info.value.index == 0

    def test_required_fields_cannot_be_cleared(self) -> None:
        with pytest.raises(SchemaValidationError):
            TripUpdate(name=None)
        with pytest.raises(SchemaValidationError):
            TripUpdate.model_validate({"status": None})
