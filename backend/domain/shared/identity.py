"""Identity assertions shared by commands."""

from typing import Optional

from domain.shared.errors import AuthenticationError, AuthorizationError


def normalize_email(email: str) -> str:
    """Canonical form used as storage key for emails."""
    return email.strip().lower()


def ensure_same_identity(verified_email: Optional[str], asserted_email: Optional[str]) -> str:
    """Check that the email asserted by the caller is the verified one.

    Args:
        verified_email: Email extracted from the verified bearer token
        asserted_email: Email sent by the client in the request body

    Returns:
        The normalized verified email

    Raises:
        AuthenticationError: If there is no verified identity
        AuthorizationError: If the asserted email differs from the verified one
    """
    if not verified_email:
        raise AuthenticationError()

    verified = normalize_email(verified_email)
    if asserted_email is not None and normalize_email(asserted_email) != verified:
        raise AuthorizationError("Email does not match authenticated user")

    return verified
