"""
Spending Patterns Use Case
"""
from typing import List

from expense_tracker.core.config import DEFAULT_PATTERN_MONTHS, MAX_PATTERN_MONTHS
from expense_tracker.core.exceptions import ValidationError
from expense_tracker.core.utils import shift_months, utc_now
from expense_tracker.models.expense import ExpenseFilter
from expense_tracker.models.owner import Owner
from expense_tracker.models.stats import SpendingPatternEntry
from expense_tracker.services.aggregation import compute_spending_patterns
from expense_tracker.services.firestore_service import ExpenseStore


class SpendingPatternsUseCase:
    """Use case for per-month totals over a trailing window"""

    def __init__(self, store: ExpenseStore):
        self.store = store

    def execute(self, owner: Owner, months: int = DEFAULT_PATTERN_MONTHS) -> List[SpendingPatternEntry]:
        if not isinstance(months, int) or not 1 <= months <= MAX_PATTERN_MONTHS:
            raise ValidationError(f"Months must be between 1 and {MAX_PATTERN_MONTHS}")

        now = utc_now()
        records = self.store.find_by_owner(
            owner.id, ExpenseFilter(start_date=shift_months(now, -months), end_date=now)
        )
        return compute_spending_patterns(records, months, now=now)
