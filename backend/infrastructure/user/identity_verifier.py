"""JWKS-backed identity verifier implementation."""

import logging
from typing import Any, Dict, Optional

import aiohttp
import jwt
from cachetools import TTLCache
from jwt import PyJWK
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError as JWTError, PyJWKError

from domain.shared.identity import normalize_email
from domain.user.auth.ports.identity_verifier import IIdentityVerifier, InvalidTokenError, JWKSError
from infrastructure.config import get_auth_audience, get_auth_issuer, get_auth_jwks_url

logger = logging.getLogger(__name__)


class JwksIdentityVerifier(IIdentityVerifier):
    """Verify RS256 identity tokens against the provider's JWKS.

    Features:
    - RS256 JWT verification with JWKS
    - JWKS caching with 1-hour TTL, refreshed on unknown kid
    - Audience and issuer validation
    - Returns the normalized `email` claim

    Environment Variables:
    - AUTH_ISSUER: Expected issuer (e.g., "https://bitelog.eu.auth0.com")
    - AUTH_AUDIENCE: API identifier/audience
    - AUTH_JWKS_URL: JWKS endpoint (default: <issuer>/.well-known/jwks.json)

    Examples:
        >>> verifier = JwksIdentityVerifier()
        >>> email = await verifier.verify_token(token)
        >>> email
        'jane@example.com'
    """

    def __init__(
        self,
        issuer: Optional[str] = None,
        audience: Optional[str] = None,
        jwks_url: Optional[str] = None,
        email_claim: str = "email",
        jwks_cache_ttl: int = 3600,
    ):
        """Initialize verifier.

        Raises:
            ValueError: If issuer, audience or JWKS URL is missing
        """
        self.issuer = issuer or get_auth_issuer()
        self.audience = audience or get_auth_audience()
        self.jwks_url = jwks_url or get_auth_jwks_url()
        self.email_claim = email_claim

        if not self.issuer:
            raise ValueError("AUTH_ISSUER is required")
        if not self.audience:
            raise ValueError("AUTH_AUDIENCE is required")
        if not self.jwks_url:
            raise ValueError("AUTH_JWKS_URL is required")

        self.jwks_cache: TTLCache[str, Dict[str, Any]] = TTLCache(maxsize=10, ttl=jwks_cache_ttl)

    async def verify_token(self, token: str) -> str:
        """Verify JWT and return its email claim.

        Raises:
            InvalidTokenError: If token is invalid, expired, malformed, or has no email
            JWKSError: If JWKS fetching fails
        """
        try:
            unverified_header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise InvalidTokenError("Malformed token") from e

        kid = unverified_header.get("kid")
        if not kid:
            raise InvalidTokenError("Token header missing 'kid'")

        if kid not in self.jwks_cache:
            await self._refresh_jwks()

        key_dict = self.jwks_cache.get(kid)
        if not key_dict:
            raise InvalidTokenError(f"JWKS key {kid} not found")

        try:
            jwk = PyJWK.from_dict(key_dict)
            payload: Dict[str, Any] = jwt.decode(
                token,
                jwk.key,
                algorithms=["RS256"],
                audience=self.audience,
                issuer=self.issuer,
            )
        except ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except (JWTError, PyJWKError) as e:
            raise InvalidTokenError(str(e)) from e

        email = payload.get(self.email_claim)
        if not isinstance(email, str) or "@" not in email:
            raise InvalidTokenError("Token has no email claim")

        return normalize_email(email)

    async def _refresh_jwks(self) -> None:
        """Refresh JWKS from the well-known endpoint.

        Raises:
            JWKSError: If JWKS fetching or parsing fails
        """
        try:
            async with aiohttp.ClientSession() as session:
                timeout = aiohttp.ClientTimeout(total=5)
                async with session.get(self.jwks_url, timeout=timeout) as resp:
                    resp.raise_for_status()
                    jwks = await resp.json()
        except aiohttp.ClientError as e:
            logger.error("jwks.fetch_failed", extra={"url": self.jwks_url, "error": str(e)})
            raise JWKSError(f"Failed to fetch JWKS: {e}") from e

        keys = jwks.get("keys") if isinstance(jwks, dict) else None
        if not isinstance(keys, list):
            raise JWKSError("JWKS document has no 'keys' list")

        for key in keys:
            kid = key.get("kid")
            if kid:
                self.jwks_cache[kid] = key

        logger.debug("jwks.refreshed", extra={"keys": len(keys)})
