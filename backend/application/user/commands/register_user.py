"""Register user command."""

from dataclasses import dataclass
from datetime import datetime
import logging
from typing import Optional, Tuple

from domain.shared.events import UserRegistered
from domain.shared.identity import ensure_same_identity
from domain.shared.ports.event_bus import IEventBus
from domain.user.core.entities.user import User
from domain.user.core.ports.user_repository import IUserRepository

logger = logging.getLogger(__name__)


@dataclass
class RegisterUserCommand:
    """Command to create the user record on first sign-in.

    Idempotent: a repeat sign-in returns the stored user unmodified and
    never overwrites existing fields.

    Examples:
        >>> command = RegisterUserCommand(repository, event_bus)
        >>> user, created = await command.execute("jane@example.com", "jane@example.com")
        >>> created
        True
    """

    repository: IUserRepository
    event_bus: IEventBus

    async def execute(
        self,
        verified_email: Optional[str],
        email: Optional[str],
        name: Optional[str] = None,
        photo: Optional[str] = None,
        signed_in_at: Optional[datetime] = None,
    ) -> Tuple[User, bool]:
        """Execute registration.

        Args:
            verified_email: Email from the verified token
            email: Email asserted in the request body
            name: Display name for new users
            photo: Photo URL for new users
            signed_in_at: Sign-in timestamp (defaults to now)

        Returns:
            (user, created) where created is False if the user already existed
        """
        owner = ensure_same_identity(verified_email, email)

        candidate = User.create(owner, name=name, photo=photo, signed_in_at=signed_in_at)
        created = await self.repository.insert_if_absent(candidate)

        if not created:
            existing = await self.repository.find_by_email(owner)
            logger.info("user.already_exists", extra={"email": owner})
            return (existing or candidate), False

        logger.info("user.registered", extra={"email": owner})
        await self.event_bus.publish(UserRegistered(email=owner))
        return candidate, True
