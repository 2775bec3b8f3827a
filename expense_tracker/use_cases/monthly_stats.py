"""
Monthly Stats Use Case
"""
from expense_tracker.core.utils import month_bounds, validate_period
from expense_tracker.models.expense import ExpenseFilter
from expense_tracker.models.owner import Owner
from expense_tracker.models.stats import MonthlyAggregate
from expense_tracker.services.aggregation import compute_monthly_aggregate
from expense_tracker.services.firestore_service import ExpenseStore


class MonthlyStatsUseCase:
    """Use case for one month's total and per-category breakdown"""

    def __init__(self, store: ExpenseStore):
        self.store = store

    def execute(self, owner: Owner, year: int, month: int) -> MonthlyAggregate:
        """
        Totals the owner's spending for one calendar month

        Raises:
            ValidationError: year or month out of range
        """
        validate_period(year, month)
        start, end = month_bounds(year, month)
        records = self.store.find_by_owner(
            owner.id, ExpenseFilter(start_date=start, end_date=end)
        )
        return compute_monthly_aggregate(records, year, month)
