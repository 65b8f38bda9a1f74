"""Unit tests for User entity."""

import pytest
from datetime import datetime, timezone
from freezegun import freeze_time

from domain.user.core.entities.user import DEFAULT_BADGE, Role, User


class TestUserEntity:
    """Test User entity."""

    @freeze_time("2025-01-01 12:00:00")
    def test_create_user_with_defaults(self):
        """New users start as plain users with the default badge."""
        user = User.create("Jane@Example.com ", name="Jane", photo="https://img/jane.png")

        assert user.email == "jane@example.com"
        assert user.role == Role.USER
        assert user.badge == DEFAULT_BADGE == "Bronze"
        assert user.meals_added == 0
        assert user.last_log_in == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_create_generates_unique_ids(self):
        first = User.create("a@example.com")
        second = User.create("b@example.com")

        assert first.id != second.id

    def test_invalid_email_rejected(self):
        with pytest.raises(ValueError):
            User(id="u1", email="not-an-email")

    def test_negative_meals_added_rejected(self):
        with pytest.raises(ValueError):
            User(id="u1", email="a@example.com", meals_added=-1)

    def test_membership_follows_badge(self):
        user = User.create("a@example.com")
        assert user.has_membership is False

        user.badge = "Gold"
        assert user.has_membership is True

    def test_is_admin(self):
        user = User(id="u1", email="chef@bitelog.io", role=Role.ADMIN)
        assert user.is_admin is True

    def test_to_dict_uses_stored_field_names(self):
        user = User.create("a@example.com", name="A")

        data = user.to_dict()

        assert data["email"] == "a@example.com"
        assert data["role"] == "user"
        assert data["mealsAdded"] == 0
        assert data["badge"] == "Bronze"
        assert "last_log_in" in data
