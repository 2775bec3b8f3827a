"""
Tests for the owner get-or-create flow
"""
from decimal import Decimal

import pytest

from expense_tracker.core.exceptions import AuthenticationError
from expense_tracker.models.owner import IdentityClaims
from expense_tracker.use_cases.resolve_owner import ResolveOwnerUseCase

from conftest import InMemoryOwnerStore, make_owner


class RacingOwnerStore(InMemoryOwnerStore):
    """Another request creates the owner between our get() and create()"""

    def __init__(self, winner):
        super().__init__()
        self.winner = winner

    def create(self, owner):
        self.owners[owner.id] = self.winner
        return super().create(owner)


class TestResolveOwner:
    """Tests for ResolveOwnerUseCase."""

    def test_creates_owner_on_first_sight(self, owner_store):
        """Test lazy creation with defaults."""
        claims = IdentityClaims(subject="auth0|42", email="kasun@example.com", name="Kasun")
        owner = ResolveOwnerUseCase(owner_store).execute(claims)

        assert owner.id == "auth0|42"
        assert owner.external_identity_id == "auth0|42"
        assert owner.email == "kasun@example.com"
        assert owner.display_name == "Kasun"
        assert owner.monthly_budget_limit == Decimal("10000")
        assert owner.currency == "LKR"

    def test_missing_claims_use_placeholders(self, owner_store):
        """Test fallback email and display name."""
        owner = ResolveOwnerUseCase(owner_store).execute(IdentityClaims(subject="abc"))
        assert owner.email == "user-abc@temp.com"
        assert owner.display_name == "Unknown User"

    def test_is_idempotent(self, owner_store):
        """Test repeated logins keep a single owner."""
        claims = IdentityClaims(subject="auth0|42", email="kasun@example.com", name="Kasun")
        use_case = ResolveOwnerUseCase(owner_store)

        first = use_case.execute(claims)
        second = use_case.execute(claims)

        assert first == second
        assert owner_store.create_calls == 1
        assert owner_store.update_calls == 0
        assert len(owner_store.owners) == 1

    def test_refreshes_changed_claims(self, owner_store):
        """Test email, name and picture are updated when they differ."""
        use_case = ResolveOwnerUseCase(owner_store)
        use_case.execute(IdentityClaims(subject="s1", email="old@example.com", name="Old"))

        owner = use_case.execute(
            IdentityClaims(subject="s1", email="new@example.com", name="New", picture="https://img/p.png")
        )

        assert owner.email == "new@example.com"
        assert owner.display_name == "New"
        assert owner.avatar_url == "https://img/p.png"
        assert owner_store.owners["s1"].email == "new@example.com"

    def test_empty_claims_do_not_erase_profile(self, owner_store):
        """Test missing claims leave stored values alone."""
        use_case = ResolveOwnerUseCase(owner_store)
        use_case.execute(IdentityClaims(subject="s1", email="me@example.com", name="Me"))

        owner = use_case.execute(IdentityClaims(subject="s1"))

        assert owner.email == "me@example.com"
        assert owner_store.update_calls == 0

    def test_budget_settings_survive_refresh(self, owner_store):
        """Test a refresh does not reset the budget limit."""
        owner_store.owners["s1"] = make_owner("s1", limit="2500")
        owner = ResolveOwnerUseCase(owner_store).execute(IdentityClaims(subject="s1", name="Renamed"))
        assert owner.monthly_budget_limit == Decimal("2500")
        assert owner.display_name == "Renamed"

    def test_lost_creation_race_returns_existing_owner(self):
        """Test a concurrent create is resolved by reloading."""
        winner = make_owner("s1")
        store = RacingOwnerStore(winner)

        owner = ResolveOwnerUseCase(store).execute(IdentityClaims(subject="s1", email="s1@example.com"))

        assert owner.id == "s1"
        assert store.owners["s1"] == owner

    def test_missing_subject(self, owner_store):
        """Test claims without a subject are rejected."""
        with pytest.raises(AuthenticationError):
            ResolveOwnerUseCase(owner_store).execute(IdentityClaims(email="x@example.com"))
