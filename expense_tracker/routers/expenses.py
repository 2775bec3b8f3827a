"""
Expenses Router - CRUD and statistics for the authenticated owner
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from expense_tracker.core.config import DEFAULT_PATTERN_MONTHS, MAX_PATTERN_MONTHS
from expense_tracker.core.utils import MAX_YEAR, MIN_YEAR
from expense_tracker.deps import get_current_owner, get_expense_store
from expense_tracker.models.expense import (
    DeleteExpenseResponse,
    ExpenseCategory,
    ExpenseCreate,
    ExpenseFilter,
    ExpenseRecord,
    ExpenseUpdate,
)
from expense_tracker.models.owner import Owner
from expense_tracker.models.stats import BudgetAlert, MonthlyAggregate, SpendingPatternEntry
from expense_tracker.services.firestore_service import ExpenseStore
from expense_tracker.use_cases.add_expense import AddExpenseUseCase
from expense_tracker.use_cases.budget_alert import BudgetAlertUseCase
from expense_tracker.use_cases.delete_expense import DeleteExpenseUseCase
from expense_tracker.use_cases.get_expense import GetExpenseUseCase
from expense_tracker.use_cases.list_expenses import ListExpensesUseCase
from expense_tracker.use_cases.monthly_stats import MonthlyStatsUseCase
from expense_tracker.use_cases.spending_patterns import SpendingPatternsUseCase
from expense_tracker.use_cases.update_expense import UpdateExpenseUseCase

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


@router.post("", response_model=ExpenseRecord, status_code=status.HTTP_201_CREATED)
def create_expense(
    payload: ExpenseCreate,
    owner: Owner = Depends(get_current_owner),
    store: ExpenseStore = Depends(get_expense_store),
):
    """Records a new expense"""
    return AddExpenseUseCase(store).execute(owner, payload)


@router.get("", response_model=List[ExpenseRecord])
def list_expenses(
    category: Optional[ExpenseCategory] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    min_amount: Optional[Decimal] = None,
    max_amount: Optional[Decimal] = None,
    owner: Owner = Depends(get_current_owner),
    store: ExpenseStore = Depends(get_expense_store),
):
    """Lists the owner's expenses, newest first"""
    filters = ExpenseFilter(
        category=category,
        start_date=start_date,
        end_date=end_date,
        min_amount=min_amount,
        max_amount=max_amount,
    )
    return ListExpensesUseCase(store).execute(owner, filters)


@router.get("/stats/monthly", response_model=MonthlyAggregate)
def get_monthly_stats(
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR),
    month: int = Query(..., ge=1, le=12),
    owner: Owner = Depends(get_current_owner),
    store: ExpenseStore = Depends(get_expense_store),
):
    return MonthlyStatsUseCase(store).execute(owner, year, month)


@router.get("/stats/alert", response_model=BudgetAlert)
def get_budget_alert(
    year: int = Query(..., ge=MIN_YEAR, le=MAX_YEAR),
    month: int = Query(..., ge=1, le=12),
    owner: Owner = Depends(get_current_owner),
    store: ExpenseStore = Depends(get_expense_store),
):
    return BudgetAlertUseCase(store).execute(owner, year, month)


@router.get("/stats/patterns", response_model=List[SpendingPatternEntry])
def get_spending_patterns(
    months: int = Query(DEFAULT_PATTERN_MONTHS, ge=1, le=MAX_PATTERN_MONTHS),
    owner: Owner = Depends(get_current_owner),
    store: ExpenseStore = Depends(get_expense_store),
):
    """Per-month totals for trend charts"""
    return SpendingPatternsUseCase(store).execute(owner, months)


@router.get("/{expense_id}", response_model=ExpenseRecord)
def get_expense(
    expense_id: str,
    owner: Owner = Depends(get_current_owner),
    store: ExpenseStore = Depends(get_expense_store),
):
    return GetExpenseUseCase(store).execute(owner, expense_id)


@router.patch("/{expense_id}", response_model=ExpenseRecord)
def update_expense(
    expense_id: str,
    payload: ExpenseUpdate,
    owner: Owner = Depends(get_current_owner),
    store: ExpenseStore = Depends(get_expense_store),
):
    return UpdateExpenseUseCase(store).execute(owner, expense_id, payload)


@router.delete("/{expense_id}", response_model=DeleteExpenseResponse)
def delete_expense(
    expense_id: str,
    owner: Owner = Depends(get_current_owner),
    store: ExpenseStore = Depends(get_expense_store),
):
    return DeleteExpenseUseCase(store).execute(owner, expense_id)
