"""
Auth Router - health and the authenticated owner's profile
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from expense_tracker.deps import get_current_owner, get_owner_store
from expense_tracker.models.owner import Owner, OwnerProfileUpdate
from expense_tracker.services.firestore_service import OwnerStore
from expense_tracker.use_cases.update_profile import UpdateProfileUseCase

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/health")
def auth_health():
    return {
        "message": "Auth service is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": "healthy",
    }


@router.get("/profile", response_model=Owner)
def get_profile(owner: Owner = Depends(get_current_owner)):
    """Profile of the caller, created on first login"""
    return owner


@router.patch("/profile", response_model=Owner)
def update_profile(
    payload: OwnerProfileUpdate,
    owner: Owner = Depends(get_current_owner),
    owners: OwnerStore = Depends(get_owner_store),
):
    return UpdateProfileUseCase(owners).execute(owner, payload)
