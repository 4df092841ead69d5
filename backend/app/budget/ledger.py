"""Expense ledger - actual spend, aggregation and estimate-vs-actual variance."""

import logging
import math
import uuid
from collections import defaultdict

from sqlalchemy.orm import Session

from backend.app.budget.estimator import duration_in_days, estimate_cost
from backend.app.config import Settings
from backend.app.db.context import RequestContext
from backend.app.db.engine import atomic
from backend.app.db.models import Expense, Trip
from backend.app.db.queries import ensure_can_edit, ensure_can_view, get_trip_graph
from backend.app.db.repositories import CatalogReader
from backend.app.errors import NotFoundError, ValidationError
from backend.app.models.budget import ActualSpend, BudgetView, LedgerSummary
from backend.app.models.common import ExpenseCategory
from backend.app.models.expense import ExpenseCreate, ExpenseRead

logger = logging.getLogger(__name__)


def summarize_expenses(trip: Trip, estimated_total: float) -> LedgerSummary:
    """Aggregate a trip's expenses and compare them to an estimate.

    Always recomputed from the current expense rows. Categories with no
    expenses are left out of ``by_category``.

    Args:
        trip: Trip with expenses loaded
        estimated_total: Estimated total from the cost estimator

    Returns:
        Actual spend and variance (actual - estimated)
    """
    by_category: dict[ExpenseCategory, float] = defaultdict(float)
    for expense in trip.expenses:
        by_category[ExpenseCategory(expense.category)] += expense.amount

    total = sum(by_category.values())
    days = duration_in_days(trip.start_date, trip.end_date)
    avg_per_day = total / days if days else 0.0

    return LedgerSummary(
        actual=ActualSpend(by_category=dict(by_category), total=total, avg_per_day=avg_per_day),
        variance=total - estimated_total,
    )


class ExpenseLedger:
    """Records actual expenses for a trip and builds its budget view."""

    def __init__(self, session: Session, catalog: CatalogReader, settings: Settings) -> None:
        self._session = session
        self._catalog = catalog
        self._settings = settings

    def add_expense(
        self, trip_id: uuid.UUID, expense: ExpenseCreate, ctx: RequestContext
    ) -> ExpenseRead:
        """Append an expense to a trip's ledger.

        Raises:
            NotFoundError: If the trip does not exist
            ForbiddenError: If the actor may not edit the trip
            ValidationError: If amount is not finite or <= 0, the category is
                unknown or the currency is not a 3-letter code
        """
        trip = get_trip_graph(self._session, trip_id)
        ensure_can_edit(trip, ctx)

        if not math.isfinite(expense.amount) or expense.amount <= 0:
            raise ValidationError("Amount must be a finite number greater than 0", field="amount")

        if expense.category not in ExpenseCategory.__members__:
            raise ValidationError(
                f"Unknown expense category '{expense.category}'", field="category"
            )

        currency = (expense.currency or self._settings.default_currency).upper()
        if len(currency) != 3 or not currency.isalpha():
            raise ValidationError("Currency must be a 3-letter code", field="currency")

        row = Expense(
            trip_id=trip.trip_id,
            category=expense.category,
            amount=expense.amount,
            currency=currency,
            description=expense.description,
            date=expense.date,
        )
        with atomic(self._session, "add_expense"):
            trip.expenses.append(row)

        logger.info(
            f"Expense added to trip {trip_id}",
            extra={"structured": {"trip_id": str(trip_id), "category": row.category}},
        )
        return _expense_to_read(row)

    def list_expenses(self, trip_id: uuid.UUID, ctx: RequestContext) -> list[ExpenseRead]:
        """List a trip's expenses by date."""
        trip = get_trip_graph(self._session, trip_id)
        ensure_can_view(trip, ctx)
        return [_expense_to_read(e) for e in sorted(trip.expenses, key=lambda e: e.date)]

    def delete_expense(
        self, trip_id: uuid.UUID, expense_id: uuid.UUID, ctx: RequestContext
    ) -> None:
        """Remove one expense from a trip's ledger.

        Raises:
            NotFoundError: If the trip or the expense (within this trip) is missing
        """
        trip = get_trip_graph(self._session, trip_id)
        ensure_can_edit(trip, ctx)

        expense = next((e for e in trip.expenses if e.expense_id == expense_id), None)
        if expense is None:
            raise NotFoundError("expense", expense_id)

        with atomic(self._session, "delete_expense"):
            trip.expenses.remove(expense)

    def budget_view(self, trip_id: uuid.UUID, ctx: RequestContext) -> BudgetView:
        """Build the estimated vs. actual budget view for a trip."""
        trip = get_trip_graph(self._session, trip_id)
        ensure_can_view(trip, ctx)

        estimated = estimate_cost(trip, self._catalog)
        summary = summarize_expenses(trip, estimated.total)

        return BudgetView(estimated=estimated, actual=summary.actual, variance=summary.variance)


def _expense_to_read(expense: Expense) -> ExpenseRead:
    return ExpenseRead(
        id=expense.expense_id,
        trip_id=expense.trip_id,
        category=expense.category,
        amount=expense.amount,
        currency=expense.currency,
        description=expense.description,
        date=expense.date,
    )
