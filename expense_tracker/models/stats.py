"""
Statistics Models

Derived from an owner's records on request; never persisted.
"""
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel

from expense_tracker.models.expense import ExpenseCategory, JsonDecimal


class MonthlyAggregate(BaseModel):
    """Total and per-category spending for one calendar month"""
    total_amount: JsonDecimal
    record_count: int
    totals_by_category: Dict[ExpenseCategory, JsonDecimal]
    period_start: datetime
    period_end: datetime


class BudgetAlert(BaseModel):
    """Spending against the owner's monthly limit"""
    total_amount: JsonDecimal
    monthly_limit: JsonDecimal
    percentage_used: JsonDecimal
    is_alert: bool
    alert_message: Optional[str] = None


class SpendingPatternEntry(BaseModel):
    """One calendar month inside a trailing window"""
    month_key: str
    total: JsonDecimal
    totals_by_category: Dict[ExpenseCategory, JsonDecimal]
