"""Itinerary models - whole-itinerary replacement payloads."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.models.common import ActivityType, to_naive_utc

CUSTOM_ATTRACTION = "custom"


class MoveDirection(str, Enum):
    """Direction for moving a stop within the sequence."""

    up = "up"
    down = "down"


class ActivityInput(BaseModel):
    """Activity as submitted by the editing flow.

    ``attraction_id`` of None (or the legacy ``"custom"`` marker) makes the
    activity custom. Name, cost and type may be omitted for catalog
    activities and are then taken from the attraction.
    """

    model_config = ConfigDict(extra="forbid")

    attraction_id: UUID | None = None
    name: Annotated[str | None, Field(min_length=1, max_length=200)] = None
    description: Annotated[str | None, Field(max_length=500)] = None
    type: ActivityType | None = None
    cost: Annotated[float | None, Field(ge=0)] = None
    duration: Annotated[int | None, Field(gt=0)] = None
    date: datetime | None = None
    time: str | None = None
    notes: Annotated[str | None, Field(max_length=500)] = None

    @field_validator("attraction_id", mode="before")
    @classmethod
    def custom_marker_to_none(cls, v: Any) -> Any:
        """Map the ``"custom"`` marker and empty strings to None."""
        if v in (CUSTOM_ATTRACTION, ""):
            return None
        return v

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime | None) -> datetime | None:
        """Store dates as naive UTC."""
        return to_naive_utc(v) if v is not None else None


class StopInput(BaseModel):
    """Stop as submitted by the editing flow.

    ``order`` is accepted for compatibility but never trusted: the store
    renumbers stops from their position in the submitted list.
    """

    model_config = ConfigDict(extra="forbid")

    city_id: UUID
    start_date: datetime
    end_date: datetime
    order: int | None = None
    notes: Annotated[str | None, Field(max_length=500)] = None
    activities: list[ActivityInput] = Field(default_factory=list)

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime) -> datetime:
        """Store dates as naive UTC."""
        return to_naive_utc(v)


class ItineraryReplaceRequest(BaseModel):
    """Request body for PUT /trips/{trip_id}/itinerary."""

    model_config = ConfigDict(extra="forbid")

    stops: list[StopInput]
