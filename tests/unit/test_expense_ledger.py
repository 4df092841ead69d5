"""Unit tests for the expense ledger and budget view."""

import uuid
from collections.abc import Callable
from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from backend.app.budget.ledger import ExpenseLedger, summarize_expenses
from backend.app.config import Settings
from backend.app.db.context import RequestContext
from backend.app.db.inmemory import InMemoryCatalogReader
from backend.app.db.models import Expense, Trip, TripActivity, TripStop
from backend.app.errors import ForbiddenError, LockedTripError, NotFoundError, ValidationError
from backend.app.models.common import ExpenseCategory
from backend.app.models.expense import ExpenseCreate


@pytest.fixture
def ledger(session: Session, catalog: InMemoryCatalogReader, settings: Settings) -> ExpenseLedger:
    return ExpenseLedger(session, catalog, settings)


def _expense(amount: float, category: str = "meals", day: int = 2, **kwargs) -> ExpenseCreate:
    return ExpenseCreate(amount=amount, category=category, date=datetime(2026, 6, day), **kwargs)


class TestAddExpense:
    """Validation and persistence of logged expenses."""

    def test_zero_amount_rejected(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], owner_ctx: RequestContext
    ) -> None:
        trip = make_trip()

        with pytest.raises(ValidationError) as exc_info:
            ledger.add_expense(trip.trip_id, _expense(0), owner_ctx)

        assert exc_info.value.field == "amount"
        assert ledger.list_expenses(trip.trip_id, owner_ctx) == []

    def test_negative_amount_rejected(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], owner_ctx: RequestContext
    ) -> None:
        trip = make_trip()

        with pytest.raises(ValidationError):
            ledger.add_expense(trip.trip_id, _expense(-5), owner_ctx)

    @pytest.mark.parametrize("amount", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_amount_rejected(
        self,
        ledger: ExpenseLedger,
        make_trip: Callable[..., Trip],
        owner_ctx: RequestContext,
        amount: float,
    ) -> None:
        trip = make_trip()

        with pytest.raises(ValidationError) as exc_info:
            ledger.add_expense(trip.trip_id, _expense(amount), owner_ctx)

        assert exc_info.value.field == "amount"
        assert ledger.list_expenses(trip.trip_id, owner_ctx) == []

    def test_meals_expense_accepted(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], owner_ctx: RequestContext
    ) -> None:
        trip = make_trip()

        created = ledger.add_expense(trip.trip_id, _expense(10.5), owner_ctx)

        assert created.amount == 10.5
        assert created.category == ExpenseCategory.meals
        assert created.currency == "USD"

        view = ledger.budget_view(trip.trip_id, owner_ctx)
        assert view.actual.by_category[ExpenseCategory.meals] == 10.5
        assert view.actual.total == 10.5

    def test_unknown_category_rejected(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], owner_ctx: RequestContext
    ) -> None:
        trip = make_trip()

        with pytest.raises(ValidationError) as exc_info:
            ledger.add_expense(trip.trip_id, _expense(12, category="souvenirs"), owner_ctx)

        assert exc_info.value.field == "category"

    def test_currency_is_stored_uppercase(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], owner_ctx: RequestContext
    ) -> None:
        trip = make_trip()

        created = ledger.add_expense(trip.trip_id, _expense(12, currency="eur"), owner_ctx)

        assert created.currency == "EUR"

    def test_locked_trip_rejects_owner(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], owner_ctx: RequestContext
    ) -> None:
        trip = make_trip(is_locked=True)

        with pytest.raises(LockedTripError):
            ledger.add_expense(trip.trip_id, _expense(12), owner_ctx)

    def test_non_owner_forbidden(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], other_ctx: RequestContext
    ) -> None:
        trip = make_trip()

        with pytest.raises(ForbiddenError):
            ledger.add_expense(trip.trip_id, _expense(12), other_ctx)


class TestListAndDelete:
    def test_list_sorted_by_date(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], owner_ctx: RequestContext
    ) -> None:
        trip = make_trip()
        ledger.add_expense(trip.trip_id, _expense(30, day=5), owner_ctx)
        ledger.add_expense(trip.trip_id, _expense(10, day=2), owner_ctx)

        expenses = ledger.list_expenses(trip.trip_id, owner_ctx)

        assert [e.amount for e in expenses] == [10, 30]

    def test_delete_expense(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], owner_ctx: RequestContext
    ) -> None:
        trip = make_trip()
        keep = ledger.add_expense(trip.trip_id, _expense(30), owner_ctx)
        drop = ledger.add_expense(trip.trip_id, _expense(10), owner_ctx)

        ledger.delete_expense(trip.trip_id, drop.id, owner_ctx)

        assert [e.id for e in ledger.list_expenses(trip.trip_id, owner_ctx)] == [keep.id]

    def test_delete_unknown_expense(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], owner_ctx: RequestContext
    ) -> None:
        trip = make_trip()

        with pytest.raises(NotFoundError) as exc_info:
            ledger.delete_expense(trip.trip_id, uuid.uuid4(), owner_ctx)

        assert exc_info.value.entity_type == "expense"


class TestBudgetView:
    def test_empty_ledger(
        self, ledger: ExpenseLedger, make_trip: Callable[..., Trip], owner_ctx: RequestContext
    ) -> None:
        trip = make_trip()

        view = ledger.budget_view(trip.trip_id, owner_ctx)

        assert view.actual.total == 0.0
        assert view.actual.by_category == {}
        assert view.actual.avg_per_day == 0.0
        assert view.variance == 0.0

    def test_variance_against_estimate(
        self,
        ledger: ExpenseLedger,
        session: Session,
        catalog: InMemoryCatalogReader,
        make_trip: Callable[..., Trip],
        owner_ctx: RequestContext,
    ) -> None:
        """Actual 200 vs estimated 170 gives variance +30."""
        city = catalog.add_city("Porto", "Portugal", 50.0)
        trip = make_trip(start_date=datetime(2026, 6, 1), end_date=datetime(2026, 6, 11))
        trip.stops.append(
            TripStop(
                city_id=city.city_id,
                order=1,
                start_date=datetime(2026, 6, 1),
                end_date=datetime(2026, 6, 4),
                activities=[TripActivity(name="Port tasting", cost=20.0)],
            )
        )
        session.commit()

        ledger.add_expense(trip.trip_id, _expense(120, category="accommodation"), owner_ctx)
        ledger.add_expense(trip.trip_id, _expense(80), owner_ctx)

        view = ledger.budget_view(trip.trip_id, owner_ctx)

        assert view.estimated.total == 170.0
        assert view.actual.total == 200.0
        assert view.actual.by_category == {
            ExpenseCategory.accommodation: 120.0,
            ExpenseCategory.meals: 80.0,
        }
        assert view.actual.avg_per_day == 20.0
        assert view.variance == 30.0


def test_summarize_zero_day_trip() -> None:
    """A trip with no duration reports 0 per day."""
    trip = Trip(
        owner_id=uuid.uuid4(),
        name="Day trip",
        start_date=datetime(2026, 6, 1),
        end_date=datetime(2026, 6, 1),
        expenses=[Expense(category="transport", amount=15.0, currency="USD", date=datetime(2026, 6, 1))],
    )

    summary = summarize_expenses(trip, estimated_total=40.0)

    assert summary.actual.total == 15.0
    assert summary.actual.avg_per_day == 0.0
    assert summary.variance == -25.0
