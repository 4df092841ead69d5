"""Common types and enums shared across all models."""

from datetime import datetime, timezone
from enum import Enum


class TripStatus(str, Enum):
    """Trip lifecycle status."""

    planning = "planning"
    upcoming = "upcoming"
    ongoing = "ongoing"
    past = "past"


class ActivityType(str, Enum):
    """Category of a planned activity."""

    sightseeing = "sightseeing"
    dining = "dining"
    adventure = "adventure"
    relaxation = "relaxation"
    shopping = "shopping"
    other = "other"


class ExpenseCategory(str, Enum):
    """Category of a logged expense."""

    transport = "transport"
    accommodation = "accommodation"
    activities = "activities"
    meals = "meals"
    other = "other"


def to_naive_utc(value: datetime) -> datetime:
    """Normalize a datetime to naive UTC.

    Stored datetimes are naive UTC; aware inputs are converted first so that
    comparisons against stored values never mix naive and aware objects.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utcnow() -> datetime:
    """Current time as naive UTC, the form every stored datetime takes."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
