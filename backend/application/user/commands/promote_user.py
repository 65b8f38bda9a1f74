"""Promote user to admin command."""

from dataclasses import dataclass
import logging

from domain.user.core.entities.user import Role, User
from domain.user.core.exceptions.user_errors import UserNotFoundError
from domain.user.core.ports.user_repository import IUserRepository

logger = logging.getLogger(__name__)


@dataclass
class PromoteUserCommand:
    """Command to grant the admin role.

    Callers must already hold the admin capability.
    """

    repository: IUserRepository

    async def execute(self, email: str) -> User:
        """Promote user.

        Raises:
            UserNotFoundError: If user doesn't exist
        """
        user = await self.repository.set_role(email, Role.ADMIN)

        if user is None:
            raise UserNotFoundError(email)

        logger.info("user.promoted", extra={"email": user.email})
        return user
