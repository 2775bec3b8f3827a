"""
Core utilities: money conversion, calendar-month math, ID normalization, etc.
"""
import calendar
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Tuple

from expense_tracker.core.exceptions import ConfigurationError, ValidationError

MIN_YEAR = 1970
MAX_YEAR = 9999


def to_decimal(value: Any) -> Decimal:
    """
    Converts a stored or user-provided amount to Decimal.
    Floats go through str() so 12.5 becomes Decimal("12.5"), not its binary expansion.
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    if isinstance(value, (int, float)):
        return Decimal(str(value))

    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"Invalid amount: {value!r}")


def to_naive_utc(value: datetime) -> datetime:
    """Aware datetimes are converted to UTC and stripped of tzinfo"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_datetime(value: Any) -> Any:
    """Promotes a plain date to midnight; Firestore stores timestamps only"""
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    return value


def validate_period(year: int, month: int) -> None:
    """Rejects a year/month pair before it reaches the aggregation engine"""
    if not isinstance(year, int) or not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")
    if not isinstance(month, int) or not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")


def ensure_positive_limit(monthly_limit: Decimal) -> Decimal:
    if monthly_limit is None or monthly_limit <= 0:
        raise ConfigurationError("Monthly budget limit must be greater than zero")
    return monthly_limit


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """
    First and last instant of a calendar month, both inclusive.

    Example:
    (2024, 2) -> (2024-02-01 00:00:00, 2024-02-29 23:59:59.999999)
    """
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime(year, month, last_day, 23, 59, 59, 999999)
    return start, end


def shift_months(value: datetime, months: int) -> datetime:
    """
    Moves a datetime by whole calendar months.
    The day is clamped to the target month's length (03-31 minus 1 month -> 02-29 or 02-28).
    """
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def month_key(value: datetime) -> str:
    """"YYYY-M" with a 1-based month and no zero padding"""
    return f"{value.year}-{value.month}"


def owner_doc_id(external_identity_id: str) -> str:
    """
    Firestore document id for an identity subject.
    Subjects like "auth0|abc" are kept as-is; "/" is not allowed in a document id.
    """
    return str(external_identity_id).replace("/", "%2F")
