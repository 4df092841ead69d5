"""Trip and itinerary endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from backend.app.api.auth import get_current_context
from backend.app.api.deps import get_itinerary_store, get_trip_service
from backend.app.db.context import RequestContext
from backend.app.itinerary.store import ItineraryStore
from backend.app.models.itinerary import ItineraryReplaceRequest
from backend.app.models.trip import StopRead, TripCreate, TripRead, TripUpdate
from backend.app.trips.service import TripService

router = APIRouter(prefix="/trips", tags=["trips"])

ContextDep = Annotated[RequestContext, Depends(get_current_context)]
TripServiceDep = Annotated[TripService, Depends(get_trip_service)]
ItineraryStoreDep = Annotated[ItineraryStore, Depends(get_itinerary_store)]


@router.post("", response_model=TripRead, status_code=status.HTTP_201_CREATED)
def create_trip(request: TripCreate, ctx: ContextDep, service: TripServiceDep) -> TripRead:
    """Create a trip owned by the caller."""
    return service.create_trip(request, ctx)


@router.get("", response_model=list[TripRead])
def list_trips(ctx: ContextDep, service: TripServiceDep) -> list[TripRead]:
    """List the caller's trips."""
    return service.list_trips(ctx)


@router.get("/{trip_id}", response_model=TripRead)
def get_trip(trip_id: uuid.UUID, ctx: ContextDep, service: TripServiceDep) -> TripRead:
    """Get a trip (owner or admin)."""
    return service.get_trip(trip_id, ctx)


@router.patch("/{trip_id}", response_model=TripRead)
def update_trip(
    trip_id: uuid.UUID, request: TripUpdate, ctx: ContextDep, service: TripServiceDep
) -> TripRead:
    """Edit a trip (owner of an unlocked trip, or admin)."""
    return service.update_trip(trip_id, request, ctx)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trip(trip_id: uuid.UUID, ctx: ContextDep, service: TripServiceDep) -> Response:
    """Delete a trip and everything it owns."""
    service.delete_trip(trip_id, ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{trip_id}/itinerary", response_model=list[StopRead])
def get_itinerary(
    trip_id: uuid.UUID, ctx: ContextDep, store: ItineraryStoreDep
) -> list[StopRead]:
    """Get the trip's stops in order with their activities."""
    return store.get_itinerary(trip_id, ctx)


@router.put("/{trip_id}/itinerary")
def replace_itinerary(
    trip_id: uuid.UUID,
    request: ItineraryReplaceRequest,
    ctx: ContextDep,
    store: ItineraryStoreDep,
) -> dict[str, str]:
    """Replace the trip's whole itinerary.

    Returns:
        200 with an empty body on success; 400/403/404 otherwise
    """
    store.replace_itinerary(trip_id, request.stops, ctx)
    return {}
