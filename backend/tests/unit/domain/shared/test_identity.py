"""Unit tests for identity assertions."""

import pytest

from domain.shared.errors import AuthenticationError, AuthorizationError
from domain.shared.identity import ensure_same_identity, normalize_email


def test_normalize_email():
    assert normalize_email("  Jane@Example.COM ") == "jane@example.com"


def test_matching_identity_returns_normalized_email():
    assert ensure_same_identity("Jane@example.com", "jane@EXAMPLE.com") == "jane@example.com"


def test_missing_asserted_email_uses_verified_one():
    assert ensure_same_identity("jane@example.com", None) == "jane@example.com"


def test_missing_verified_identity_is_authentication_error():
    with pytest.raises(AuthenticationError):
        ensure_same_identity(None, "jane@example.com")


def test_mismatch_is_authorization_error():
    with pytest.raises(AuthorizationError, match="does not match"):
        ensure_same_identity("jane@example.com", "mallory@example.com")
