"""Share link manager - one public share token per trip."""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.config import Settings
from backend.app.db.context import RequestContext
from backend.app.db.engine import atomic
from backend.app.db.models import SharedTrip, Trip
from backend.app.db.queries import ensure_owner, get_shared_trip, get_trip_graph
from backend.app.errors import ConflictError, InternalError, NotFoundError
from backend.app.models.common import TripStatus, utcnow
from backend.app.models.share import SharedTripRead, SharedTripView, ShareCreateRequest
from backend.app.sharing.tokens import generate_share_token
from backend.app.trips.projections import stops_to_read
from backend.app.utils.metrics import share_links_created_total, share_token_collisions_total

logger = logging.getLogger(__name__)


class ShareLinkManager:
    """Issues, updates and revokes share links, and resolves them for viewers."""

    def __init__(
        self,
        session: Session,
        settings: Settings,
        token_factory: Callable[[int], str] = generate_share_token,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session = session
        self._settings = settings
        self._token_factory = token_factory
        self._clock = clock

    def create_share_link(
        self, trip_id: uuid.UUID, request: ShareCreateRequest, ctx: RequestContext
    ) -> SharedTripRead:
        """Create the trip's share link.

        A token collision is resolved by generating a new token; it is never
        surfaced to the caller unless every attempt collides.

        Raises:
            NotFoundError: If the trip does not exist
            ForbiddenError: If the actor is not the owner
            ConflictError: If the trip already has a share link
        """
        trip = get_trip_graph(self._session, trip_id)
        ensure_owner(trip, ctx)

        if trip.shared_trip is not None:
            raise ConflictError(
                "Trip already has a share link", details={"trip_id": str(trip_id)}
            )

        for attempt in range(1, self._settings.share_token_max_attempts + 1):
            token = self._token_factory(self._settings.share_token_bytes)

            if self._token_taken(token):
                share_token_collisions_total.inc()
                logger.info(
                    "Share token collision, regenerating",
                    extra={"structured": {"trip_id": str(trip_id), "attempt": attempt}},
                )
                continue

            shared = SharedTrip(
                trip_id=trip.trip_id,
                share_id=token,
                is_public=request.is_public,
                can_copy=request.can_copy,
                expires_at=request.expires_at,
            )
            try:
                with atomic(self._session, "create_share_link"):
                    self._session.add(shared)
            except InternalError as e:
                if not isinstance(e.__cause__, IntegrityError):
                    raise
                # Lost a race: either this trip got a link meanwhile or the token did
                if self._link_exists(trip.trip_id):
                    raise ConflictError(
                        "Trip already has a share link", details={"trip_id": str(trip_id)}
                    ) from e
                share_token_collisions_total.inc()
                continue

            share_links_created_total.inc()
            return SharedTripRead.model_validate(shared)

        raise InternalError("create_share_link", "share token generation exhausted")

    def get_share_link(self, trip_id: uuid.UUID, ctx: RequestContext) -> SharedTripRead:
        """Get the trip's share link for its owner.

        Raises:
            NotFoundError: If the trip or its link does not exist
        """
        trip = get_trip_graph(self._session, trip_id)
        ensure_owner(trip, ctx)
        return SharedTripRead.model_validate(self._require_link(trip))

    def update_visibility(
        self, trip_id: uuid.UUID, is_public: bool, ctx: RequestContext
    ) -> SharedTripRead:
        """Toggle a link's public flag; the token is unchanged."""
        trip = get_trip_graph(self._session, trip_id)
        ensure_owner(trip, ctx)
        shared = self._require_link(trip)

        with atomic(self._session, "update_share_visibility"):
            shared.is_public = is_public

        return SharedTripRead.model_validate(shared)

    def revoke(self, trip_id: uuid.UUID, ctx: RequestContext) -> None:
        """Delete the trip's share link; lookups of its token fail from now on.

        Revoking a trip without a link is a no-op.
        """
        trip = get_trip_graph(self._session, trip_id)
        ensure_owner(trip, ctx)

        if trip.shared_trip is None:
            return

        with atomic(self._session, "revoke_share_link"):
            trip.shared_trip = None

        logger.info("Share link revoked", extra={"structured": {"trip_id": str(trip_id)}})

    def resolve(self, share_id: str, viewer_id: uuid.UUID | None) -> tuple[SharedTrip, Trip]:
        """Resolve a token to its link and trip for a viewer.

        Expired links and, for anyone but the owner, non-public links resolve
        as missing.

        Raises:
            NotFoundError: If the link is missing, expired or not visible
        """
        shared = get_shared_trip(self._session, share_id)

        if shared.expires_at is not None and shared.expires_at <= self._clock():
            raise NotFoundError("share", share_id)

        trip = get_trip_graph(self._session, shared.trip_id)

        if not shared.is_public and viewer_id != trip.owner_id:
            raise NotFoundError("share", share_id)

        return shared, trip

    def lookup(self, share_id: str, viewer_id: uuid.UUID | None = None) -> SharedTripView:
        """Read-only projection of a shared trip, identical for every viewer."""
        shared, trip = self.resolve(share_id, viewer_id)

        return SharedTripView(
            share_id=shared.share_id,
            can_copy=shared.can_copy,
            name=trip.name,
            description=trip.description,
            cover_image=trip.cover_image,
            start_date=trip.start_date,
            end_date=trip.end_date,
            status=TripStatus(trip.status),
            stops=stops_to_read(trip.stops),
        )

    def _require_link(self, trip: Trip) -> SharedTrip:
        if trip.shared_trip is None:
            raise NotFoundError("share", trip.trip_id)
        return trip.shared_trip

    def _token_taken(self, token: str) -> bool:
        return (
            self._session.execute(
                select(SharedTrip.id).where(SharedTrip.share_id == token)
            ).first()
            is not None
        )

    def _link_exists(self, trip_id: uuid.UUID) -> bool:
        return (
            self._session.execute(
                select(SharedTrip.id).where(SharedTrip.trip_id == trip_id)
            ).first()
            is not None
        )
