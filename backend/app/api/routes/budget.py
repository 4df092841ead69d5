"""Budget and expense endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from backend.app.api.auth import get_current_context
from backend.app.api.deps import get_expense_ledger
from backend.app.budget.ledger import ExpenseLedger
from backend.app.db.context import RequestContext
from backend.app.models.budget import BudgetView
from backend.app.models.expense import ExpenseCreate, ExpenseRead

router = APIRouter(prefix="/trips/{trip_id}", tags=["budget"])

ContextDep = Annotated[RequestContext, Depends(get_current_context)]
LedgerDep = Annotated[ExpenseLedger, Depends(get_expense_ledger)]


@router.get("/budget", response_model=BudgetView)
def get_budget(trip_id: uuid.UUID, ctx: ContextDep, ledger: LedgerDep) -> BudgetView:
    """Estimated vs. actual spend for a trip."""
    return ledger.budget_view(trip_id, ctx)


@router.post("/expenses", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
def add_expense(
    trip_id: uuid.UUID, request: ExpenseCreate, ctx: ContextDep, ledger: LedgerDep
) -> ExpenseRead:
    """Log an actual expense."""
    return ledger.add_expense(trip_id, request, ctx)


@router.get("/expenses", response_model=list[ExpenseRead])
def list_expenses(trip_id: uuid.UUID, ctx: ContextDep, ledger: LedgerDep) -> list[ExpenseRead]:
    """List a trip's logged expenses."""
    return ledger.list_expenses(trip_id, ctx)


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    trip_id: uuid.UUID, expense_id: uuid.UUID, ctx: ContextDep, ledger: LedgerDep
) -> Response:
    """Remove a logged expense."""
    ledger.delete_expense(trip_id, expense_id, ctx)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
