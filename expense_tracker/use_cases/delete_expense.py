"""
Delete Expense Use Case
"""
import logging

from expense_tracker.core.exceptions import NotFoundError
from expense_tracker.models.expense import DeleteExpenseResponse
from expense_tracker.models.owner import Owner
from expense_tracker.services.firestore_service import ExpenseStore

logger = logging.getLogger(__name__)


class DeleteExpenseUseCase:
    """Use case for deleting an expense"""

    def __init__(self, store: ExpenseStore):
        self.store = store

    def execute(self, owner: Owner, expense_id: str) -> DeleteExpenseResponse:
        if not self.store.delete(owner.id, expense_id):
            raise NotFoundError("Expense not found")

        logger.info(f"Expense {expense_id} deleted for owner {owner.id}")
        return DeleteExpenseResponse(message="Expense deleted successfully", id=expense_id)
