"""Trip models - creation input and read projections."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from backend.app.models.common import ActivityType, TripStatus, to_naive_utc


class TripCreate(BaseModel):
    """Request body for creating a trip."""

    model_config = ConfigDict(extra="forbid")

    name: Annotated[str, Field(min_length=1, max_length=100)]
    description: Annotated[str | None, Field(max_length=500)] = None
    cover_image: str | None = None
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime) -> datetime:
        """Store dates as naive UTC."""
        return to_naive_utc(v)

    @model_validator(mode="after")
    def validate_end_after_start(self) -> "TripCreate":
        """Ensure end_date > start_date."""
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class TripUpdate(BaseModel):
    """Request body for PATCH /trips/{trip_id}.

    Only fields present in the body are applied. ``description``,
    ``cover_image`` and ``admin_notes`` may be set to null to clear them;
    ``admin_notes`` is writable by admins only.
    """

    model_config = ConfigDict(extra="forbid")

    name: Annotated[str | None, Field(min_length=1, max_length=100)] = None
    description: Annotated[str | None, Field(max_length=500)] = None
    cover_image: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: TripStatus | None = None
    admin_notes: Annotated[str | None, Field(max_length=1000)] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        """Store dates as naive UTC."""
        return to_naive_utc(v) if v is not None else None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "TripUpdate":
        """Name, dates and status can be changed but not cleared."""
        for field in ("name", "start_date", "end_date", "status"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class ActivityRead(BaseModel):
    """Planned activity within a stop."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    attraction_id: UUID | None
    name: str
    description: str | None
    type: ActivityType
    cost: float
    duration: int | None
    date: datetime | None
    time: str | None
    notes: str | None
    is_custom: bool


class StopRead(BaseModel):
    """One city-visit segment of a trip."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    city_id: UUID
    order: int
    start_date: datetime
    end_date: datetime
    notes: str | None
    activities: list[ActivityRead]


class TripRead(BaseModel):
    """Trip as seen by its owner or an admin.

    ``admin_notes`` is only populated for admin viewers.
    """

    id: UUID
    owner_id: UUID
    name: str
    description: str | None
    cover_image: str | None
    start_date: datetime
    end_date: datetime
    status: TripStatus
    is_locked: bool
    share_id: str | None
    admin_notes: str | None = None
    created_at: datetime | None = None


class ClonedTripResponse(BaseModel):
    """Response for clone operations."""

    trip_id: UUID
    message: str
