"""
Aggregation Service - monthly totals, budget alerts and spending patterns

Pure functions over an already-fetched list of one owner's records.
Input is never mutated and the same input always gives the same output.
Year/month and the budget limit are validated by the caller
(see core.utils.validate_period and core.utils.ensure_positive_limit).
"""
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from expense_tracker.core.config import BUDGET_ALERT_THRESHOLD
from expense_tracker.core.utils import month_bounds, month_key, shift_months, utc_now
from expense_tracker.models.expense import ExpenseCategory, ExpenseRecord
from expense_tracker.models.stats import BudgetAlert, MonthlyAggregate, SpendingPatternEntry

ZERO = Decimal("0")
ONE_DECIMAL = Decimal("0.1")
TWO_DECIMALS = Decimal("0.01")


def _add_to_category(totals: Dict[ExpenseCategory, Decimal], record: ExpenseRecord) -> None:
    totals[record.category] = totals.get(record.category, ZERO) + record.amount


def compute_monthly_aggregate(
    records: Iterable[ExpenseRecord], year: int, month: int
) -> MonthlyAggregate:
    """
    Total and per-category sums for records dated inside the calendar month.

    Both bounds are inclusive: a record on the month's last instant counts,
    one on the first instant of the next month does not.
    Categories with no records are absent from totals_by_category.
    """
    period_start, period_end = month_bounds(year, month)

    total = ZERO
    count = 0
    by_category: Dict[ExpenseCategory, Decimal] = {}

    for record in records:
        if not period_start <= record.date <= period_end:
            continue
        total += record.amount
        count += 1
        _add_to_category(by_category, record)

    return MonthlyAggregate(
        total_amount=total,
        record_count=count,
        totals_by_category=by_category,
        period_start=period_start,
        period_end=period_end,
    )


def compute_budget_alert(
    records: Iterable[ExpenseRecord],
    year: int,
    month: int,
    monthly_limit: Decimal,
    threshold: Decimal = BUDGET_ALERT_THRESHOLD,
) -> BudgetAlert:
    """
    Share of the monthly limit used by the month's spending.

    Alerts when the exact share is >= threshold (90 by default).
    percentage_used is rounded half-up to two places, the message to one.
    monthly_limit must be positive.
    """
    aggregate = compute_monthly_aggregate(records, year, month)
    percentage_used = aggregate.total_amount / monthly_limit * 100
    is_alert = percentage_used >= threshold

    alert_message = None
    if is_alert:
        shown = percentage_used.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)
        alert_message = f"Warning: You've used {shown}% of your monthly budget!"

    return BudgetAlert(
        total_amount=aggregate.total_amount,
        monthly_limit=monthly_limit,
        percentage_used=percentage_used.quantize(TWO_DECIMALS, rounding=ROUND_HALF_UP),
        is_alert=is_alert,
        alert_message=alert_message,
    )


def compute_spending_patterns(
    records: Iterable[ExpenseRecord],
    window_months: int,
    now: Optional[datetime] = None,
) -> List[SpendingPatternEntry]:
    """
    Per-month totals over [now - window_months calendar months, now].

    Only months that have records produce an entry. Entries are sorted by the
    month-key string, so "2024-10" comes before "2024-9".
    """
    end = now or utc_now()
    start = shift_months(end, -window_months)

    totals: Dict[str, Decimal] = {}
    by_category: Dict[str, Dict[ExpenseCategory, Decimal]] = {}

    for record in records:
        if not start <= record.date <= end:
            continue
        key = month_key(record.date)
        totals[key] = totals.get(key, ZERO) + record.amount
        _add_to_category(by_category.setdefault(key, {}), record)

    return [
        SpendingPatternEntry(
            month_key=key,
            total=totals[key],
            totals_by_category=by_category[key],
        )
        for key in sorted(totals)
    ]
