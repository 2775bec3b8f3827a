from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from expense_tracker.core.exceptions import AuthenticationError
from expense_tracker.models.owner import IdentityClaims, Owner
from expense_tracker.services.firestore_service import ExpenseStore, OwnerStore
from expense_tracker.services.google_auth import GoogleAuth
from expense_tracker.use_cases.resolve_owner import ResolveOwnerUseCase

_expense_store: Optional[ExpenseStore] = None
_owner_store: Optional[OwnerStore] = None

bearer_scheme = HTTPBearer(auto_error=False)


def get_expense_store() -> ExpenseStore:
    global _expense_store
    if _expense_store is None:
        _expense_store = ExpenseStore()
    return _expense_store


def get_owner_store() -> OwnerStore:
    global _owner_store
    if _owner_store is None:
        _owner_store = OwnerStore()
    return _owner_store


def get_identity_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> IdentityClaims:
    if credentials is None:
        raise AuthenticationError("Missing bearer token")
    payload = GoogleAuth.verify_identity_token(credentials.credentials)
    return IdentityClaims.from_token_payload(payload)


def get_current_owner(
    claims: IdentityClaims = Depends(get_identity_claims),
    owners: OwnerStore = Depends(get_owner_store),
) -> Owner:
    return ResolveOwnerUseCase(owners).execute(claims)
