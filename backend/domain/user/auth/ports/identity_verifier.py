"""Identity verification port (interface)."""

from abc import ABC, abstractmethod

from domain.shared.errors import AuthenticationError, GatewayError


class IIdentityVerifier(ABC):
    """Identity verification collaborator.

    Given a bearer credential returns the verified principal email.
    Allows mocking in tests and swapping identity providers.
    """

    @abstractmethod
    async def verify_token(self, token: str) -> str:
        """Verify bearer token and return the verified email.

        Args:
            token: JWT from the Authorization header

        Returns:
            Normalized email of the verified principal

        Raises:
            InvalidTokenError: Token is invalid, expired, or has no email claim
            JWKSError: Signing keys cannot be fetched or parsed

        Note:
            Implementation should:
            - Verify signature with JWKS (RS256)
            - Validate audience and issuer
            - Check expiration
            - Cache JWKS (1h TTL recommended)
        """
        pass


class InvalidTokenError(AuthenticationError):
    """Token verification failed."""

    code = "invalid_token"

    def __init__(self, reason: str):
        """Initialize with failure reason.

        Args:
            reason: Human-readable reason for failure
        """
        self.reason = reason
        super().__init__(f"Invalid token: {reason}")


class JWKSError(GatewayError):
    """JWKS fetching or processing failed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"JWKS error: {reason}")
