"""
Firestore Service - persistence for owners and expenses

Layout:
    owners/{owner_id}                      owner profile
    owners/{owner_id}/expenses/{expense}   expense records

Every expense call takes the owner id, so a query can only ever see one
owner's subcollection.
"""
import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from expense_tracker.core.config import DEFAULT_CURRENCY
from expense_tracker.core.exceptions import ConflictError, FirestoreError
from expense_tracker.core.utils import as_datetime, to_decimal, to_naive_utc, utc_now
from expense_tracker.models.expense import ExpenseFilter, ExpenseRecord
from expense_tracker.models.owner import Owner
from expense_tracker.services.google_auth import GoogleAuth

logger = logging.getLogger(__name__)

OWNERS = "owners"
EXPENSES = "expenses"


def _encode_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return as_datetime(value)
    if isinstance(value, dict):
        return {key: _encode_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_encode_value(item) for item in value]
    return value


def _decode_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return to_naive_utc(as_datetime(value))


def _to_record(owner_id: str, doc_id: str, data: Dict[str, Any]) -> ExpenseRecord:
    return ExpenseRecord(
        id=doc_id,
        owner_id=owner_id,
        description=data.get("description", ""),
        amount=to_decimal(data.get("amount")),
        date=_decode_datetime(data.get("date")),
        category=data.get("category", "other"),
        currency=data.get("currency") or DEFAULT_CURRENCY,
        notes=data.get("notes"),
        created_at=_decode_datetime(data.get("created_at")),
        updated_at=_decode_datetime(data.get("updated_at")),
    )


def _to_owner(doc_id: str, data: Dict[str, Any]) -> Owner:
    fields = dict(data)
    fields["id"] = doc_id
    if "monthly_budget_limit" in fields:
        fields["monthly_budget_limit"] = to_decimal(fields["monthly_budget_limit"])
    for key in ("created_at", "updated_at"):
        fields[key] = _decode_datetime(fields.get(key))
    return Owner(**fields)


class FirestoreStore:
    """Base for stores sharing one Firestore client"""

    def __init__(self, client: Optional[firestore.Client] = None):
        self.db = client or GoogleAuth.get_firestore_client()

    def _owner_ref(self, owner_id: str):
        return self.db.collection(OWNERS).document(owner_id)

    def _expenses(self, owner_id: str):
        return self._owner_ref(owner_id).collection(EXPENSES)


class OwnerStore(FirestoreStore):
    """Owner profiles keyed by the identity-derived owner id"""

    def get(self, owner_id: str) -> Optional[Owner]:
        try:
            doc = self._owner_ref(owner_id).get()
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Error reading owner {owner_id}: {e}", exc_info=True)
            raise FirestoreError("Could not read owner") from e

        if doc.exists:
            return _to_owner(doc.id, doc.to_dict())
        return None

    def create(self, owner: Owner) -> Owner:
        """
        Creates the owner document; fails if it already exists.

        Raises:
            ConflictError: another request created the same owner first
        """
        now = utc_now()
        owner = owner.model_copy(update={"created_at": now, "updated_at": now})
        data = owner.model_dump(exclude={"id"})

        try:
            self._owner_ref(owner.id).create(_encode_value(data))
        except google_exceptions.AlreadyExists as e:
            raise ConflictError(f"Owner {owner.id} already exists") from e
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Error creating owner {owner.id}: {e}", exc_info=True)
            raise FirestoreError("Could not create owner") from e

        return owner

    def update(self, owner_id: str, fields: Dict[str, Any]) -> Optional[Owner]:
        """Applies the given fields; returns None if the owner does not exist"""
        ref = self._owner_ref(owner_id)
        try:
            doc = ref.get()
            if not doc.exists:
                return None
            changes = dict(fields, updated_at=utc_now())
            ref.update(_encode_value(changes))
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Error updating owner {owner_id}: {e}", exc_info=True)
            raise FirestoreError("Could not update owner") from e

        data = doc.to_dict()
        data.update(changes)
        return _to_owner(owner_id, data)


class ExpenseStore(FirestoreStore):
    """Expense records in each owner's subcollection"""

    def add(self, owner_id: str, fields: Dict[str, Any]) -> ExpenseRecord:
        now = utc_now()
        data = dict(fields, created_at=now, updated_at=now)
        try:
            _, ref = self._expenses(owner_id).add(_encode_value(data))
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Error saving expense for {owner_id}: {e}", exc_info=True)
            raise FirestoreError("Could not save expense") from e

        return _to_record(owner_id, ref.id, _encode_value(data))

    def find_by_owner(
        self, owner_id: str, filters: Optional[ExpenseFilter] = None
    ) -> List[ExpenseRecord]:
        """
        Owner's records, newest first.
        The date range runs in Firestore; category and amount filters run here.
        """
        filters = filters or ExpenseFilter()
        query = self._expenses(owner_id)
        if filters.start_date is not None:
            query = query.where(filter=firestore.FieldFilter("date", ">=", filters.start_date))
        if filters.end_date is not None:
            query = query.where(filter=firestore.FieldFilter("date", "<=", filters.end_date))
        query = query.order_by("date", direction=firestore.Query.DESCENDING)

        try:
            docs = query.stream()
            records = [_to_record(owner_id, doc.id, doc.to_dict()) for doc in docs]
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Error listing expenses for {owner_id}: {e}", exc_info=True)
            raise FirestoreError("Could not list expenses") from e

        return [record for record in records if filters.matches(record)]

    def get(self, owner_id: str, expense_id: str) -> Optional[ExpenseRecord]:
        try:
            doc = self._expenses(owner_id).document(expense_id).get()
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Error reading expense {expense_id}: {e}", exc_info=True)
            raise FirestoreError("Could not read expense") from e

        if doc.exists:
            return _to_record(owner_id, doc.id, doc.to_dict())
        return None

    def update(
        self, owner_id: str, expense_id: str, fields: Dict[str, Any]
    ) -> Optional[ExpenseRecord]:
        ref = self._expenses(owner_id).document(expense_id)
        try:
            doc = ref.get()
            if not doc.exists:
                return None
            changes = _encode_value(dict(fields, updated_at=utc_now()))
            ref.update(changes)
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Error updating expense {expense_id}: {e}", exc_info=True)
            raise FirestoreError("Could not update expense") from e

        data = doc.to_dict()
        data.update(changes)
        return _to_record(owner_id, expense_id, data)

    def delete(self, owner_id: str, expense_id: str) -> bool:
        ref = self._expenses(owner_id).document(expense_id)
        try:
            if not ref.get().exists:
                return False
            ref.delete()
        except google_exceptions.GoogleAPICallError as e:
            logger.error(f"Error deleting expense {expense_id}: {e}", exc_info=True)
            raise FirestoreError("Could not delete expense") from e
        return True
