"""
Add Expense Use Case
"""
import logging

from expense_tracker.models.expense import ExpenseCreate, ExpenseRecord
from expense_tracker.models.owner import Owner
from expense_tracker.services.firestore_service import ExpenseStore

logger = logging.getLogger(__name__)


class AddExpenseUseCase:
    """Use case for recording an expense"""

    def __init__(self, store: ExpenseStore):
        self.store = store

    def execute(self, owner: Owner, payload: ExpenseCreate) -> ExpenseRecord:
        """
        Stores a new expense for the owner.
        Currency falls back to the owner's currency when the payload has none.
        """
        fields = payload.model_dump()
        fields["currency"] = payload.currency or owner.currency

        record = self.store.add(owner.id, fields)
        logger.info(f"Expense {record.id} created for owner {owner.id}")
        return record
