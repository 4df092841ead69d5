"""Models package - re-exports for convenience."""

from backend.app.models.budget import ActualSpend, BudgetView, CostEstimate, LedgerSummary
from backend.app.models.common import ActivityType, ExpenseCategory, TripStatus
from backend.app.models.expense import ExpenseCreate, ExpenseRead
from backend.app.models.itinerary import (
    ActivityInput,
    ItineraryReplaceRequest,
    MoveDirection,
    StopInput,
)
from backend.app.models.share import (
    SharedTripRead,
    SharedTripView,
    ShareCreateRequest,
    ShareVisibilityRequest,
)
from backend.app.models.trip import (
    ActivityRead,
    ClonedTripResponse,
    StopRead,
    TripCreate,
    TripRead,
    TripUpdate,
)

__all__ = [
    # Common
    "TripStatus",
    "ActivityType",
    "ExpenseCategory",
    # Trip
    "TripCreate",
    "TripRead",
    "TripUpdate",
    "StopRead",
    "ActivityRead",
    "ClonedTripResponse",
    # Itinerary
    "ActivityInput",
    "StopInput",
    "ItineraryReplaceRequest",
    "MoveDirection",
    # Budget
    "CostEstimate",
    "ActualSpend",
    "LedgerSummary",
    "BudgetView",
    # Expense
    "ExpenseCreate",
    "ExpenseRead",
    # Share
    "ShareCreateRequest",
    "ShareVisibilityRequest",
    "SharedTripRead",
    "SharedTripView",
]
