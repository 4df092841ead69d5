"""Share link models and the public read-only trip projection."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from backend.app.models.common import TripStatus, to_naive_utc
from backend.app.models.trip import StopRead


class ShareCreateRequest(BaseModel):
    """Request body for POST /trips/{trip_id}/share."""

    model_config = ConfigDict(extra="forbid")

    is_public: bool = True
    can_copy: bool = True
    expires_at: datetime | None = None

    @field_validator("expires_at")
    @classmethod
    def normalize_expiry(cls, v: datetime | None) -> datetime | None:
        """Store expiry as naive UTC."""
        return to_naive_utc(v) if v is not None else None


class ShareVisibilityRequest(BaseModel):
    """Request body for PATCH /trips/{trip_id}/share."""

    model_config = ConfigDict(extra="forbid")

    is_public: bool


class SharedTripRead(BaseModel):
    """Share link as seen by the trip owner."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    trip_id: UUID
    share_id: str
    is_public: bool
    can_copy: bool
    expires_at: datetime | None
    created_at: datetime | None = None


class SharedTripView(BaseModel):
    """Read-only projection returned for a share-link lookup.

    Carries no owner identity, admin notes, lock flag or expenses, whoever
    the requester is.
    """

    share_id: str
    can_copy: bool
    name: str
    description: str | None
    cover_image: str | None
    start_date: datetime
    end_date: datetime
    status: TripStatus
    stops: list[StopRead]
