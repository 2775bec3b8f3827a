"""
Update Profile Use Case
"""
import logging

from expense_tracker.core.exceptions import NotFoundError
from expense_tracker.models.owner import Owner, OwnerProfileUpdate
from expense_tracker.services.firestore_service import OwnerStore

logger = logging.getLogger(__name__)


class UpdateProfileUseCase:
    """Use case for changing the owner's budget limit and currency"""

    def __init__(self, owners: OwnerStore):
        self.owners = owners

    def execute(self, owner: Owner, payload: OwnerProfileUpdate) -> Owner:
        fields = payload.model_dump(exclude_none=True)
        if not fields:
            return owner

        updated = self.owners.update(owner.id, fields)
        if updated is None:
            raise NotFoundError("Owner not found")

        logger.info(f"Profile updated for owner {owner.id}: {sorted(fields)}")
        return updated
