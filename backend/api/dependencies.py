"""FastAPI dependencies: collaborators from app.state and capability checks.

Every route declares exactly one capability:

- PUBLIC: no identity needed (an identity, if present, is still resolved)
- AUTHENTICATED: a verified email is required
- ADMIN: the verified email must belong to a stored admin user

Ownership checks need the target document, so they run inside the
application commands after the existence check.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from fastapi import Depends, Request

from application.user.queries.get_user import GetUserQuery
from domain.membership.core.ports.payment_gateway import IPaymentGateway
from domain.shared.errors import AuthenticationError
from domain.shared.ports.event_bus import IEventBus
from domain.user.core.entities.user import User
from infrastructure.payments.stripe_gateway import StripePaymentGateway
from infrastructure.persistence.factory import Repositories


class Capability(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


@dataclass(frozen=True)
class Caller:
    """Identity of the current request."""

    email: Optional[str]
    user: Optional[User] = None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories


def get_event_bus(request: Request) -> IEventBus:
    return request.app.state.event_bus


def get_promotion_threshold(request: Request) -> int:
    return request.app.state.promotion_threshold


def get_payment_gateway(request: Request) -> IPaymentGateway:
    """Payment gateway, built on first use so the app starts without Stripe keys."""
    gateway = getattr(request.app.state, "payment_gateway", None)
    if gateway is None:
        gateway = StripePaymentGateway()
        request.app.state.payment_gateway = gateway
    return gateway


def requires(capability: Capability) -> Callable[..., Awaitable[Caller]]:
    """Build the dependency enforcing a capability.

    Example:
        >>> @router.post("/meals")
        ... async def add_meal(caller: Caller = Depends(requires(Capability.ADMIN))):
        ...     ...
    """

    async def dependency(
        request: Request,
        repositories: Repositories = Depends(get_repositories),
    ) -> Caller:
        email: Optional[str] = getattr(request.state, "auth_email", None)

        if capability == Capability.PUBLIC:
            return Caller(email=email)

        if not email:
            raise AuthenticationError()

        users = GetUserQuery(repositories.users)
        if capability == Capability.ADMIN:
            return Caller(email=email, user=await users.require_admin(email))

        return Caller(email=email, user=await users.by_email(email))

    return dependency
