"""User registered event handler."""

from dataclasses import dataclass
import logging

from domain.shared.events import UserRegistered


logger = logging.getLogger(__name__)


@dataclass
class UserRegisteredHandler:
    """Handler for UserRegistered domain event.

    Triggered when a user signs in for the first time.
    """

    async def handle(self, event: UserRegistered) -> None:
        logger.info(
            "User registered",
            extra={
                "email": event.email,
                "registered_at": event.occurred_at.isoformat(),
            },
        )
