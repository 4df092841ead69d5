"""Unit tests for best-effort audit recording."""

import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from prometheus_client import REGISTRY
from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.audit import record_audit_fact
from backend.app.db.context import RequestContext
from backend.app.db.inmemory import InMemoryAuditRecorder, InMemoryCatalogReader
from backend.app.db.models import AuditLog, Trip
from backend.app.db.sql_repositories import SqlAuditRecorder
from backend.app.itinerary.store import ItineraryStore
from backend.app.models.common import utcnow
from backend.app.models.itinerary import StopInput


class FailingAuditRecorder:
    """Recorder whose sink is down."""

    def record(
        self, action: str, entity_type: str, entity_id: str, actor_id: uuid.UUID, detail: str
    ) -> None:
        raise ConnectionError("audit sink unavailable")


def _failures(action: str) -> float:
    return REGISTRY.get_sample_value("audit_failures_total", {"action": action}) or 0.0


def test_record_audit_fact_success() -> None:
    recorder = InMemoryAuditRecorder()
    actor = uuid.uuid4()

    assert record_audit_fact(recorder, "trip_locked", "trip", uuid.uuid4(), actor, "Locked") is True
    assert recorder.facts[0].actor_id == actor


def test_record_audit_fact_failure_is_swallowed_and_counted() -> None:
    before = _failures("trip_locked")

    ok = record_audit_fact(FailingAuditRecorder(), "trip_locked", "trip", uuid.uuid4(), uuid.uuid4(), "")

    assert ok is False
    assert _failures("trip_locked") == before + 1


def test_failing_audit_does_not_roll_back_mutation(
    session: Session,
    catalog: InMemoryCatalogReader,
    make_trip: Callable[..., Trip],
    admin_ctx: RequestContext,
    owner_ctx: RequestContext,
) -> None:
    city = catalog.add_city("Oslo", "Norway", 150.0)
    trip = make_trip()
    store = ItineraryStore(session, catalog, FailingAuditRecorder())

    store.replace_itinerary(
        trip.trip_id,
        [StopInput(city_id=city.city_id, start_date=datetime(2026, 6, 1), end_date=datetime(2026, 6, 3))],
        admin_ctx,
    )

    assert [s.city_id for s in store.get_itinerary(trip.trip_id, owner_ctx)] == [city.city_id]


def test_sql_audit_recorder_persists_row(session: Session) -> None:
    actor = uuid.uuid4()
    entity = uuid.uuid4()

    SqlAuditRecorder(session).record("trip_duplicated", "trip", str(entity), actor, "Duplicated")

    row = session.execute(select(AuditLog)).scalar_one()
    assert row.action == "trip_duplicated"
    assert row.entity_id == str(entity)
    assert row.actor_id == actor
    assert row.timestamp is not None


def test_utcnow_is_naive_utc() -> None:
    now = utcnow()

    assert now.tzinfo is None
    assert abs(now - datetime.now(timezone.utc).replace(tzinfo=None)) < timedelta(seconds=5)


def test_audit_timestamps_are_naive_utc(session: Session) -> None:
    recorder = InMemoryAuditRecorder()
    recorder.record("trip_locked", "trip", str(uuid.uuid4()), uuid.uuid4(), "Locked")
    SqlAuditRecorder(session).record("trip_unlocked", "trip", str(uuid.uuid4()), uuid.uuid4(), "Unlocked")

    stored = session.execute(select(AuditLog)).scalar_one().timestamp
    for timestamp in (recorder.facts[0].timestamp, stored):
        assert timestamp.tzinfo is None
        assert abs(utcnow() - timestamp) < timedelta(seconds=5)
