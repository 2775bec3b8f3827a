"""
Update Expense Use Case
"""
import logging

from expense_tracker.core.exceptions import NotFoundError
from expense_tracker.models.expense import ExpenseRecord, ExpenseUpdate
from expense_tracker.models.owner import Owner
from expense_tracker.services.firestore_service import ExpenseStore

logger = logging.getLogger(__name__)


class UpdateExpenseUseCase:
    """Use case for a partial expense update"""

    def __init__(self, store: ExpenseStore):
        self.store = store

    def execute(self, owner: Owner, expense_id: str, payload: ExpenseUpdate) -> ExpenseRecord:
        """
        Changes only the fields present in the payload

        Raises:
            NotFoundError: the owner has no expense with this id
        """
        fields = payload.model_dump(exclude_unset=True)
        if not fields:
            record = self.store.get(owner.id, expense_id)
        else:
            record = self.store.update(owner.id, expense_id, fields)

        if record is None:
            raise NotFoundError("Expense not found")

        if fields:
            logger.info(f"Expense {expense_id} updated: {sorted(fields)}")
        return record
