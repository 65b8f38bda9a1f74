"""User repository port (interface)."""

from abc import ABC, abstractmethod
from typing import List, Optional

from domain.user.core.entities.user import Role, User


class IUserRepository(ABC):
    """Repository interface for users.

    Counter and role changes are expressed as targeted atomic updates,
    never as read-modify-write of the whole document.
    """

    @abstractmethod
    async def insert_if_absent(self, user: User) -> bool:
        """Insert user unless one with the same email exists.

        Args:
            user: User entity to persist

        Returns:
            True if inserted, False if a user with that email already existed

        Note:
            Must be atomic on the email key so concurrent first sign-ins
            produce exactly one record.
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find user by (normalized) email."""
        pass

    @abstractmethod
    async def search(self, text: str = "", role: Optional[Role] = None) -> List[User]:
        """Case-insensitive substring search over name and email.

        Args:
            text: Substring to match (empty matches everything)
            role: Restrict to one role when given
        """
        pass

    @abstractmethod
    async def set_role(self, email: str, role: Role) -> Optional[User]:
        """Set role, returning the updated user or None if absent."""
        pass

    @abstractmethod
    async def set_badge(self, email: str, badge: str) -> Optional[User]:
        """Set badge, returning the updated user or None if absent."""
        pass

    @abstractmethod
    async def increment_meals_added(self, email: str, delta: int) -> None:
        """Atomically add delta to mealsAdded, never going below 0."""
        pass
