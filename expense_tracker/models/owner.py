"""
Owner Models
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from expense_tracker.core.config import DEFAULT_CURRENCY, DEFAULT_MONTHLY_BUDGET_LIMIT
from expense_tracker.models.expense import JsonDecimal


class IdentityClaims(BaseModel):
    """Claims taken from a verified identity token"""
    subject: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None

    @classmethod
    def from_token_payload(cls, payload: Dict[str, Any]) -> "IdentityClaims":
        return cls(
            subject=payload.get("sub"),
            email=payload.get("email"),
            name=payload.get("name"),
            picture=payload.get("picture"),
        )


class Owner(BaseModel):
    """User who exclusively owns a set of expense records"""
    id: str
    external_identity_id: str
    email: str
    display_name: str
    avatar_url: Optional[str] = None
    monthly_budget_limit: JsonDecimal = DEFAULT_MONTHLY_BUDGET_LIMIT
    currency: str = DEFAULT_CURRENCY
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OwnerProfileUpdate(BaseModel):
    """Budget settings the owner may change"""
    monthly_budget_limit: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.isalpha():
            raise ValueError("Currency must be a 3-letter code")
        return v.upper()
