"""Share link endpoints - owner management and public access by token."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from backend.app.api.auth import get_current_context, get_optional_context
from backend.app.api.deps import get_share_manager, get_trip_cloner
from backend.app.cloning.cloner import TripCloner
from backend.app.db.context import RequestContext
from backend.app.models.share import (
    SharedTripRead,
    SharedTripView,
    ShareCreateRequest,
    ShareVisibilityRequest,
)
from backend.app.models.trip import ClonedTripResponse
from backend.app.sharing.links import ShareLinkManager

router = APIRouter(tags=["share"])

ContextDep = Annotated[RequestContext, Depends(get_current_context)]
ShareManagerDep = Annotated[ShareLinkManager, Depends(get_share_manager)]


@router.post(
    "/trips/{trip_id}/share", response_model=SharedTripRead, status_code=status.HTTP_201_CREATED
)
def create_share_link(
    trip_id: uuid.UUID, request: ShareCreateRequest, ctx: ContextDep, shares: ShareManagerDep
) -> SharedTripRead:
    """Create the trip's share link; 409 if one already exists."""
    return shares.create_share_link(trip_id, request, ctx)


@router.get("/trips/{trip_id}/share", response_model=SharedTripRead)
def get_share_link(trip_id: uuid.UUID, ctx: ContextDep, shares: ShareManagerDep) -> SharedTripRead:
    """Get the trip's share link (owner only)."""
    return shares.get_share_link(trip_id, ctx)


@router.patch("/trips/{trip_id}/share", response_model=SharedTripRead)
def update_share_visibility(
    trip_id: uuid.UUID, request: ShareVisibilityRequest, ctx: ContextDep, shares: ShareManagerDep
) -> SharedTripRead:
    """Toggle the link's public flag."""
    return shares.update_visibility(trip_id, request.is_public, ctx)


@router.delete("/trips/{trip_id}/share", status_code=status.HTTP_204_NO_CONTENT)
def revoke_share_link(trip_id: uuid.UUID, ctx: ContextDep, shares: ShareManagerDep) -> Response:
    """Revoke the trip's share link."""
    shares.revoke(trip_id, ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/share/{share_id}", response_model=SharedTripView)
def view_shared_trip(
    share_id: str,
    shares: ShareManagerDep,
    ctx: Annotated[RequestContext | None, Depends(get_optional_context)],
) -> SharedTripView:
    """Read-only view of a shared trip; anonymous viewers allowed."""
    return shares.lookup(share_id, ctx.user_id if ctx else None)


@router.post("/share/{share_id}/copy", response_model=ClonedTripResponse)
def copy_shared_trip(
    share_id: str,
    ctx: ContextDep,
    cloner: Annotated[TripCloner, Depends(get_trip_cloner)],
) -> ClonedTripResponse:
    """Copy a shared trip into the caller's account."""
    clone = cloner.copy_from_share(share_id, ctx)
    return ClonedTripResponse(trip_id=clone.trip_id, message="Trip copied successfully")
