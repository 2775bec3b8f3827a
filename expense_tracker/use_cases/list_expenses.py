"""
List Expenses Use Case
"""
from typing import List, Optional

from expense_tracker.models.expense import ExpenseFilter, ExpenseRecord
from expense_tracker.models.owner import Owner
from expense_tracker.services.firestore_service import ExpenseStore


class ListExpensesUseCase:
    """Use case for listing an owner's expenses"""

    def __init__(self, store: ExpenseStore):
        self.store = store

    def execute(self, owner: Owner, filters: Optional[ExpenseFilter] = None) -> List[ExpenseRecord]:
        """
        Lists the owner's expenses, newest first

        Returns:
            List[ExpenseRecord]: records matching every filter that was given
        """
        filters = filters or ExpenseFilter()
        filters.check_ranges()
        return self.store.find_by_owner(owner.id, filters)
