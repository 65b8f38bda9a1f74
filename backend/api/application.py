"""FastAPI application factory.

Collaborators (repositories, identity verifier, payment gateway) can be
injected for tests; otherwise they are built from the environment.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional, Type

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from api.routers import ALL_ROUTERS
from domain.membership.core.ports.payment_gateway import IPaymentGateway
from domain.shared.errors import (
    AuthenticationError,
    AuthorizationError,
    BiteLogError,
    ConflictError,
    GatewayError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from domain.user.auth.ports.identity_verifier import IIdentityVerifier
from infrastructure.config import get_log_level, get_promotion_threshold
from infrastructure.events.in_memory_bus import InMemoryEventBus
from infrastructure.events.subscriptions import register_handlers
from infrastructure.persistence.factory import Repositories, create_repositories
from infrastructure.user.auth_middleware import AuthMiddleware
from infrastructure.user.identity_verifier import JwksIdentityVerifier

logger = logging.getLogger(__name__)

APP_VERSION = os.getenv("APP_VERSION", "0.0.0-dev")

INTERNAL_ERROR_MESSAGE = "Internal server error"

ERROR_STATUS: Dict[Type[BiteLogError], int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    StoreError: 500,
    GatewayError: 500,
}


def configure_logging() -> None:
    level = get_log_level()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def status_for(error: BiteLogError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status
    return 500


async def _handle_domain_error(request: Request, exc: BiteLogError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error(
            "request.failed",
            extra={"path": request.url.path, "error_type": type(exc).__name__, "error": exc.message},
        )
        message = INTERNAL_ERROR_MESSAGE
    else:
        message = exc.message
    return JSONResponse(status_code=status, content={"error": exc.code, "message": message})


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content={"error": ValidationError.code, "message": details or "Invalid request"},
    )


def create_app(
    repositories: Optional[Repositories] = None,
    identity_verifier: Optional[IIdentityVerifier] = None,
    payment_gateway: Optional[IPaymentGateway] = None,
    promotion_threshold: Optional[int] = None,
) -> FastAPI:
    """Build the BiteLog API.

    Args:
        repositories: Storage bundle (default: from REPOSITORY_BACKEND)
        identity_verifier: Bearer token verifier (default: JWKS verifier from AUTH_*)
        payment_gateway: Payment gateway (default: Stripe, built on first use)
        promotion_threshold: Likes needed to auto-publish an upcoming meal

    Raises:
        ValueError: If required configuration is missing
    """
    repositories = repositories or create_repositories()
    identity_verifier = identity_verifier or JwksIdentityVerifier()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("lifespan.startup", extra={"backend": repositories.backend})
        await repositories.initialize()
        try:
            yield
        finally:
            repositories.close()
            logger.info("lifespan.shutdown")

    app = FastAPI(title="BiteLog API", version=APP_VERSION, lifespan=lifespan)

    event_bus = InMemoryEventBus()
    register_handlers(event_bus)

    app.state.repositories = repositories
    app.state.event_bus = event_bus
    app.state.payment_gateway = payment_gateway
    app.state.promotion_threshold = promotion_threshold or get_promotion_threshold()

    app.add_middleware(AuthMiddleware, identity_verifier=identity_verifier)
    app.add_exception_handler(BiteLogError, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)

    for router in ALL_ROUTERS:
        app.include_router(router)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "BiteLog Server is running"

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"status": "ok", "backend": repositories.backend}

    @app.get("/version")
    async def version() -> Dict[str, str]:
        return {"version": APP_VERSION}

    return app
