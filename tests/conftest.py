"""
Shared fixtures

Firestore is replaced by in-memory stores with the same methods, and the
identity token is replaced by "Bearer <subject>" so tests can act as
different owners.
"""
import itertools
from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest
from fastapi import Header
from fastapi.testclient import TestClient

from expense_tracker.core.exceptions import AuthenticationError, ConflictError
from expense_tracker.deps import get_expense_store, get_identity_claims, get_owner_store
from expense_tracker.main import app
from expense_tracker.models.expense import ExpenseCategory, ExpenseFilter, ExpenseRecord
from expense_tracker.models.owner import IdentityClaims, Owner


class InMemoryOwnerStore:
    def __init__(self):
        self.owners = {}
        self.create_calls = 0
        self.update_calls = 0

    def get(self, owner_id):
        return self.owners.get(owner_id)

    def create(self, owner):
        self.create_calls += 1
        if owner.id in self.owners:
            raise ConflictError(f"Owner {owner.id} already exists")
        self.owners[owner.id] = owner
        return owner

    def update(self, owner_id, fields):
        owner = self.owners.get(owner_id)
        if owner is None:
            return None
        self.update_calls += 1
        updated = owner.model_copy(update=fields)
        self.owners[owner_id] = updated
        return updated


class InMemoryExpenseStore:
    def __init__(self):
        self.records = {}
        self._ids = itertools.count(1)

    def add(self, owner_id, fields):
        record = ExpenseRecord(id=f"exp-{next(self._ids)}", owner_id=owner_id, **fields)
        self.records[(owner_id, record.id)] = record
        return record

    def find_by_owner(self, owner_id, filters=None):
        filters = filters or ExpenseFilter()
        found = [
            record
            for (record_owner, _), record in self.records.items()
            if record_owner == owner_id and filters.matches(record)
        ]
        return sorted(found, key=lambda r: r.date, reverse=True)

    def get(self, owner_id, expense_id):
        return self.records.get((owner_id, expense_id))

    def update(self, owner_id, expense_id, fields):
        record = self.records.get((owner_id, expense_id))
        if record is None:
            return None
        updated = record.model_copy(update=fields)
        self.records[(owner_id, expense_id)] = updated
        return updated

    def delete(self, owner_id, expense_id):
        return self.records.pop((owner_id, expense_id), None) is not None


def make_record(
    amount,
    when: datetime,
    category: ExpenseCategory = ExpenseCategory.FOOD,
    owner_id: str = "owner-1",
    record_id: Optional[str] = None,
) -> ExpenseRecord:
    return ExpenseRecord(
        id=record_id or f"{owner_id}-{when.isoformat()}-{category.value}",
        owner_id=owner_id,
        description="Test expense",
        amount=Decimal(str(amount)),
        date=when,
        category=category,
        currency="LKR",
    )


def make_owner(owner_id: str = "owner-1", limit="10000") -> Owner:
    return Owner(
        id=owner_id,
        external_identity_id=owner_id,
        email=f"{owner_id}@example.com",
        display_name="Test Owner",
        monthly_budget_limit=Decimal(limit),
    )


def fake_identity_claims(authorization: Optional[str] = Header(None)) -> IdentityClaims:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Missing bearer token")
    subject = authorization[len("Bearer "):]
    return IdentityClaims(subject=subject, email=f"{subject}@example.com", name=subject.title())


@pytest.fixture
def owner_store():
    return InMemoryOwnerStore()


@pytest.fixture
def expense_store():
    return InMemoryExpenseStore()


@pytest.fixture
def owner():
    return make_owner()


@pytest.fixture
def client(owner_store, expense_store):
    app.dependency_overrides[get_owner_store] = lambda: owner_store
    app.dependency_overrides[get_expense_store] = lambda: expense_store
    app.dependency_overrides[get_identity_claims] = fake_identity_claims
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth(subject: str = "alice"):
    return {"Authorization": f"Bearer {subject}"}
