"""Admin trip endpoints - template duplication and locking."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends

from backend.app.api.auth import get_current_context
from backend.app.api.deps import get_trip_cloner, get_trip_service
from backend.app.cloning.cloner import TripCloner
from backend.app.db.context import RequestContext
from backend.app.models.trip import ClonedTripResponse, TripRead
from backend.app.trips.service import TripService

router = APIRouter(prefix="/admin/trips", tags=["admin"])

ContextDep = Annotated[RequestContext, Depends(get_current_context)]
TripServiceDep = Annotated[TripService, Depends(get_trip_service)]


@router.post("/{trip_id}/duplicate", response_model=ClonedTripResponse)
def duplicate_trip(
    trip_id: uuid.UUID,
    ctx: ContextDep,
    cloner: Annotated[TripCloner, Depends(get_trip_cloner)],
) -> ClonedTripResponse:
    """Duplicate a trip as a template under the same owner."""
    clone = cloner.duplicate_as_template(trip_id, ctx)
    return ClonedTripResponse(trip_id=clone.trip_id, message="Trip duplicated as template")


@router.post("/{trip_id}/lock", response_model=TripRead)
def lock_trip(trip_id: uuid.UUID, ctx: ContextDep, service: TripServiceDep) -> TripRead:
    """Lock a trip against owner edits."""
    return service.set_locked(trip_id, True, ctx)


@router.post("/{trip_id}/unlock", response_model=TripRead)
def unlock_trip(trip_id: uuid.UUID, ctx: ContextDep, service: TripServiceDep) -> TripRead:
    """Unlock a trip."""
    return service.set_locked(trip_id, False, ctx)
