"""
Expense Models
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from expense_tracker.core.exceptions import ValidationError
from expense_tracker.core.utils import to_naive_utc

# Decimal in Python, plain number in JSON responses
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]

MAX_AMOUNT = Decimal("1000000")


class ExpenseCategory(str, Enum):
    """Closed set of expense categories"""
    FOOD = "food"
    TRANSPORT = "transport"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    BILLS = "bills"
    HEALTH = "health"
    EDUCATION = "education"
    OTHER = "other"


def _normalize_currency(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not value.isalpha():
        raise ValueError("Currency must be a 3-letter code")
    return value.upper()


class ExpenseCreate(BaseModel):
    """Payload for creating an expense"""
    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = Field(..., min_length=3, max_length=100)
    amount: Decimal = Field(..., ge=0, le=MAX_AMOUNT, decimal_places=2)
    date: datetime
    category: ExpenseCategory
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @field_validator("currency")
    @classmethod
    def _normalize_currency(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_currency(v)


class ExpenseUpdate(BaseModel):
    """Partial update; only fields sent by the client are changed"""
    model_config = ConfigDict(str_strip_whitespace=True)

    description: Optional[str] = Field(None, min_length=3, max_length=100)
    amount: Optional[Decimal] = Field(None, ge=0, le=MAX_AMOUNT, decimal_places=2)
    date: Optional[datetime] = None
    category: Optional[ExpenseCategory] = None
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("description", "amount", "date", "category", "currency")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @field_validator("currency")
    @classmethod
    def _normalize_currency(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_currency(v)


class ExpenseFilter(BaseModel):
    """Optional filters for listing expenses"""
    category: Optional[ExpenseCategory] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v) if v is not None else v

    def check_ranges(self) -> None:
        """Raises ValidationError for inverted date or amount ranges"""
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError("start_date must not be after end_date")
        if (
            self.min_amount is not None
            and self.max_amount is not None
            and self.min_amount > self.max_amount
        ):
            raise ValidationError("min_amount must not be greater than max_amount")

    def matches(self, record: "ExpenseRecord") -> bool:
        if self.category is not None and record.category != self.category:
            return False
        if self.start_date is not None and record.date < self.start_date:
            return False
        if self.end_date is not None and record.date > self.end_date:
            return False
        if self.min_amount is not None and record.amount < self.min_amount:
            return False
        if self.max_amount is not None and record.amount > self.max_amount:
            return False
        return True


class ExpenseRecord(BaseModel):
    """Stored expense, owned by exactly one owner"""
    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    description: str
    amount: JsonDecimal = Field(..., ge=0)
    date: datetime
    category: ExpenseCategory
    currency: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DeleteExpenseResponse(BaseModel):
    message: str
    id: str
