"""Get user queries."""

from dataclasses import dataclass
from typing import List, Optional

from domain.shared.identity import normalize_email
from domain.user.core.entities.user import Role, User
from domain.shared.errors import AuthorizationError
from domain.user.core.exceptions.user_errors import AdminRequiredError, UserNotFoundError
from domain.user.core.ports.user_repository import IUserRepository


@dataclass
class GetUserQuery:
    """Read-only user lookups.

    Examples:
        >>> query = GetUserQuery(repository)
        >>> user = await query.by_email("jane@example.com")
        >>> users = await query.search("jan")
    """

    repository: IUserRepository

    async def by_email(self, email: str) -> Optional[User]:
        return await self.repository.find_by_email(normalize_email(email))

    async def profile(self, email: str, requester_email: str, requester_is_admin: bool = False) -> User:
        """Profile of email as seen by the requester (self or admin only).

        Raises:
            UserNotFoundError: If user doesn't exist
            AuthorizationError: If requester is neither the user nor an admin
        """
        user = await self.by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        if user.email != normalize_email(requester_email) and not requester_is_admin:
            raise AuthorizationError("You can only view your own profile")
        return user

    async def role(self, email: str) -> Role:
        user = await self.by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        return user.role

    async def search(self, text: str = "", role: Optional[Role] = None) -> List[User]:
        """Users whose name or email contains text (case-insensitive)."""
        return await self.repository.search(text.strip(), role=role)

    async def require_admin(self, email: str) -> User:
        """Resolve email to an admin user.

        Raises:
            AdminRequiredError: If the user is unknown or not an admin
        """
        user = await self.by_email(email)
        if user is None or not user.is_admin:
            raise AdminRequiredError(email)
        return user
