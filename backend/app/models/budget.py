"""Budget models - estimated vs. actual spend."""

from pydantic import BaseModel, Field

from backend.app.models.common import ExpenseCategory


class CostEstimate(BaseModel):
    """Planned cost derived from catalog data."""

    activity_cost: float = 0.0
    living_cost: float = 0.0
    total: float = 0.0


class ActualSpend(BaseModel):
    """Aggregated logged expenses.

    Categories with no expenses are absent from ``by_category``.
    """

    by_category: dict[ExpenseCategory, float] = Field(default_factory=dict)
    total: float = 0.0
    avg_per_day: float = 0.0


class LedgerSummary(BaseModel):
    """Actual spend plus its variance against an estimate."""

    actual: ActualSpend
    variance: float


class BudgetView(BaseModel):
    """Response for GET /trips/{trip_id}/budget."""

    estimated: CostEstimate
    actual: ActualSpend
    variance: float
