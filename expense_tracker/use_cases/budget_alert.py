"""
Budget Alert Use Case
"""
import logging

from expense_tracker.core.utils import (
    ensure_positive_limit,
    month_bounds,
    validate_period,
)
from expense_tracker.models.expense import ExpenseFilter
from expense_tracker.models.owner import Owner
from expense_tracker.models.stats import BudgetAlert
from expense_tracker.services.aggregation import compute_budget_alert
from expense_tracker.services.firestore_service import ExpenseStore

logger = logging.getLogger(__name__)


class BudgetAlertUseCase:
    """Use case for the monthly budget alert"""

    def __init__(self, store: ExpenseStore):
        self.store = store

    def execute(self, owner: Owner, year: int, month: int) -> BudgetAlert:
        """
        Compares the month's spending with the owner's monthly limit

        Raises:
            ValidationError: year or month out of range
            ConfigurationError: the owner's limit is zero or negative
        """
        validate_period(year, month)
        monthly_limit = ensure_positive_limit(owner.monthly_budget_limit)

        start, end = month_bounds(year, month)
        records = self.store.find_by_owner(
            owner.id, ExpenseFilter(start_date=start, end_date=end)
        )
        alert = compute_budget_alert(records, year, month, monthly_limit)

        if alert.is_alert:
            logger.info(f"Budget alert for owner {owner.id}: {alert.percentage_used:.1f}% used")
        return alert
