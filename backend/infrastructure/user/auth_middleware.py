"""FastAPI authentication middleware."""

import logging
from typing import Any, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from domain.user.auth.ports.identity_verifier import IIdentityVerifier, InvalidTokenError, JWKSError

logger = logging.getLogger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware for bearer-token authentication.

    Verifies the token from the Authorization header and stores the verified
    email in request.state.auth_email for downstream capability checks.

    - No token: request proceeds anonymously (auth_email = None); routes
      that need an identity reject it with 401 through their dependency.
    - Invalid token: 401 immediately.
    - JWKS failure: 500 (not the client's fault).

    Examples:
        >>> app.add_middleware(AuthMiddleware, identity_verifier=JwksIdentityVerifier())
        >>> # In route handler:
        >>> email = request.state.auth_email
    """

    def __init__(self, app: Any, identity_verifier: IIdentityVerifier) -> None:
        super().__init__(app)
        self.identity_verifier = identity_verifier

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        request.state.auth_email = None

        token = self._extract_token(request.headers.get("Authorization"))
        if not token:
            return await call_next(request)

        try:
            request.state.auth_email = await self.identity_verifier.verify_token(token)

        except InvalidTokenError as e:
            logger.info("auth.invalid_token", extra={"reason": e.reason, "path": request.url.path})
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": e.code, "message": e.message},
            )

        except JWKSError as e:
            logger.error("auth.jwks_unavailable", extra={"reason": e.reason})
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": e.code, "message": "Internal server error"},
            )

        return await call_next(request)

    def _extract_token(self, auth_header: Optional[str]) -> Optional[str]:
        """Extract Bearer token from Authorization header.

        Examples:
            >>> self._extract_token("Bearer eyJ...")
            'eyJ...'
            >>> self._extract_token("eyJ...")  # Missing Bearer
            None
        """
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2:
            return None

        scheme, token = parts
        if scheme.lower() != "bearer":
            return None

        return token
