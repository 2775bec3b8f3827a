"""
Resolve Owner Use Case
"""
import logging

from expense_tracker.core.config import DEFAULT_CURRENCY, DEFAULT_MONTHLY_BUDGET_LIMIT
from expense_tracker.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from expense_tracker.core.utils import owner_doc_id
from expense_tracker.models.owner import IdentityClaims, Owner
from expense_tracker.services.firestore_service import OwnerStore

logger = logging.getLogger(__name__)


class ResolveOwnerUseCase:
    """Get-or-create the owner behind an authenticated identity"""

    def __init__(self, owners: OwnerStore):
        self.owners = owners

    def execute(self, claims: IdentityClaims) -> Owner:
        """
        Returns the owner for the identity subject, creating it on first sight.

        Idempotent: the owner id is derived from the subject, and a lost
        creation race (ConflictError) falls back to the stored owner.
        On later logins, email, name and picture are refreshed when the
        claims carry a different non-empty value.
        """
        if not claims.subject:
            raise AuthenticationError("Identity token has no subject")

        owner_id = owner_doc_id(claims.subject)
        owner = self.owners.get(owner_id)

        if owner is None:
            try:
                return self._create(owner_id, claims)
            except ConflictError:
                logger.info(f"Owner {owner_id} created concurrently, reloading")
                owner = self.owners.get(owner_id)
                if owner is None:
                    raise NotFoundError("Owner not found")

        return self._refresh(owner, claims)

    def _create(self, owner_id: str, claims: IdentityClaims) -> Owner:
        owner = Owner(
            id=owner_id,
            external_identity_id=claims.subject,
            email=claims.email or f"user-{claims.subject}@temp.com",
            display_name=claims.name or "Unknown User",
            avatar_url=claims.picture,
            monthly_budget_limit=DEFAULT_MONTHLY_BUDGET_LIMIT,
            currency=DEFAULT_CURRENCY,
        )
        owner = self.owners.create(owner)
        logger.info(f"New owner created: {owner_id}")
        return owner

    def _refresh(self, owner: Owner, claims: IdentityClaims) -> Owner:
        updates = {}
        if claims.email and claims.email != owner.email:
            updates["email"] = claims.email
        if claims.name and claims.name != owner.display_name:
            updates["display_name"] = claims.name
        if claims.picture and claims.picture != owner.avatar_url:
            updates["avatar_url"] = claims.picture

        if not updates:
            return owner

        logger.info(f"Refreshing owner {owner.id}: {sorted(updates)}")
        updated = self.owners.update(owner.id, updates)
        if updated is None:
            raise NotFoundError("Owner not found")
        return updated
