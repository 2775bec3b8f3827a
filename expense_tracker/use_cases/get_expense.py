"""
Get Expense Use Case
"""
from expense_tracker.core.exceptions import NotFoundError
from expense_tracker.models.expense import ExpenseRecord
from expense_tracker.models.owner import Owner
from expense_tracker.services.firestore_service import ExpenseStore


class GetExpenseUseCase:
    """Use case for reading a single expense"""

    def __init__(self, store: ExpenseStore):
        self.store = store

    def execute(self, owner: Owner, expense_id: str) -> ExpenseRecord:
        record = self.store.get(owner.id, expense_id)
        if record is None:
            raise NotFoundError("Expense not found")
        return record
