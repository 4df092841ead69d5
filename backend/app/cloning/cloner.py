"""Trip cloner - deep copies of a trip's stop/activity/expense graph.

Two modes share one copy algorithm:

* template duplication: admin only, same owner, structure only (no expenses),
  provenance recorded in admin notes;
* share copy: a non-owner copies a shared trip into their own account,
  expenses included, with share link, admin notes and lock reset.

Either way the whole clone is one transaction and stop order is recomputed
1..N from the source order.
"""

import logging
import uuid
from enum import Enum

from sqlalchemy.orm import Session

from backend.app.audit import record_audit_fact
from backend.app.config import Settings
from backend.app.db.context import RequestContext
from backend.app.db.engine import atomic
from backend.app.db.models import TRIP_NAME_MAX_LENGTH, Expense, Trip, TripActivity, TripStop
from backend.app.db.queries import get_trip_graph
from backend.app.db.repositories import AuditRecorder
from backend.app.errors import EngineError, ForbiddenError
from backend.app.models.common import TripStatus
from backend.app.sharing.links import ShareLinkManager
from backend.app.utils.metrics import trip_clones_total

logger = logging.getLogger(__name__)


class CloneMode(str, Enum):
    """Clone mode."""

    template = "template"
    share_copy = "share_copy"


def bounded_name(prefix: str, name: str, suffix: str) -> str:
    """Decorate a trip name, truncating the base so the result fits the column."""
    room = TRIP_NAME_MAX_LENGTH - len(prefix) - len(suffix)
    return f"{prefix}{name[:max(room, 0)].rstrip()}{suffix}"


def copy_stops(source: Trip) -> list[TripStop]:
    """Deep-copy stops and their activities, renumbering order 1..N."""
    ordered = sorted(source.stops, key=lambda s: s.order)
    return [
        TripStop(
            city_id=stop.city_id,
            order=position,
            start_date=stop.start_date,
            end_date=stop.end_date,
            notes=stop.notes,
            activities=[
                TripActivity(
                    attraction_id=activity.attraction_id,
                    name=activity.name,
                    description=activity.description,
                    type=activity.type,
                    cost=activity.cost,
                    duration=activity.duration,
                    date=activity.date,
                    time=activity.time,
                    notes=activity.notes,
                )
                for activity in stop.activities
            ],
        )
        for position, stop in enumerate(ordered, start=1)
    ]


def copy_expenses(source: Trip) -> list[Expense]:
    """Deep-copy logged expenses."""
    return [
        Expense(
            category=expense.category,
            amount=expense.amount,
            currency=expense.currency,
            description=expense.description,
            date=expense.date,
        )
        for expense in source.expenses
    ]


class TripCloner:
    """Produces new trips from existing ones."""

    def __init__(
        self,
        session: Session,
        audit: AuditRecorder,
        shares: ShareLinkManager,
        settings: Settings,
    ) -> None:
        self._session = session
        self._audit = audit
        self._shares = shares
        self._settings = settings

    def duplicate_as_template(self, source_trip_id: uuid.UUID, ctx: RequestContext) -> Trip:
        """Duplicate a trip as a template under the same owner.

        Stops and activities are copied; expenses are not.

        Raises:
            ForbiddenError: If the actor is not an admin
            NotFoundError: If the source trip does not exist
            InternalError: If any row fails to copy (nothing is persisted)
        """
        if not ctx.is_admin:
            raise ForbiddenError("Template duplication requires admin access")

        source = get_trip_graph(self._session, source_trip_id)

        clone = Trip(
            owner_id=source.owner_id,
            name=bounded_name(self._settings.template_name_prefix, source.name, ""),
            description=source.description,
            cover_image=source.cover_image,
            start_date=source.start_date,
            end_date=source.end_date,
            status=TripStatus.upcoming.value,
            is_locked=False,
            admin_notes=f"Duplicated from trip {source.trip_id}",
            stops=copy_stops(source),
        )
        self._persist(clone, CloneMode.template)

        record_audit_fact(
            self._audit,
            action="trip_duplicated",
            entity_type="trip",
            entity_id=clone.trip_id,
            actor_id=ctx.user_id,
            detail=f"Duplicated trip {source.name} as template",
        )
        return clone

    def copy_from_share(self, share_id: str, ctx: RequestContext) -> Trip:
        """Copy a shared trip into the requester's account.

        Raises:
            NotFoundError: If the share link is missing, expired or not visible
            ForbiddenError: If the requester owns the trip or copying is disabled
            InternalError: If any row fails to copy (nothing is persisted)
        """
        shared, source = self._shares.resolve(share_id, ctx.user_id)

        if ctx.owns(source.owner_id):
            raise ForbiddenError("Cannot copy your own trip")

        if not shared.can_copy:
            raise ForbiddenError("Copying is disabled for this shared trip")

        # No share link, admin notes or lock on the copy
        clone = Trip(
            owner_id=ctx.user_id,
            name=bounded_name("", source.name, self._settings.copy_name_suffix),
            description=source.description,
            cover_image=source.cover_image,
            start_date=source.start_date,
            end_date=source.end_date,
            status=source.status,
            is_locked=False,
            admin_notes=None,
            stops=copy_stops(source),
            expenses=copy_expenses(source),
        )
        self._persist(clone, CloneMode.share_copy)
        return clone

    def _persist(self, clone: Trip, mode: CloneMode) -> None:
        try:
            with atomic(self._session, f"clone_{mode.value}"):
                self._session.add(clone)
        except EngineError:
            trip_clones_total.labels(mode=mode.value, outcome="failed").inc()
            raise

        trip_clones_total.labels(mode=mode.value, outcome="success").inc()
        logger.info(
            f"Trip cloned ({mode.value})",
            extra={
                "structured": {
                    "mode": mode.value,
                    "trip_id": str(clone.trip_id),
                    "owner_id": str(clone.owner_id),
                    "stops": len(clone.stops),
                }
            },
        )
