"""In-memory User Repository for testing."""

from copy import deepcopy
from typing import Dict, List, Optional

from domain.shared.identity import normalize_email
from domain.user.core.entities.user import Role, User
from domain.user.core.ports.user_repository import IUserRepository


class InMemoryUserRepository(IUserRepository):
    """In-memory implementation of User repository for testing.

    Stores users in memory keyed by normalized email. Every method runs
    without awaiting, so each call is atomic on the event loop.

    Examples:
        >>> repo = InMemoryUserRepository()
        >>> await repo.insert_if_absent(User.create("jane@example.com"))
        True
        >>> found = await repo.find_by_email("jane@example.com")
    """

    def __init__(self) -> None:
        """Initialize empty in-memory storage."""
        self._users: Dict[str, User] = {}

    async def insert_if_absent(self, user: User) -> bool:
        if user.email in self._users:
            return False
        self._users[user.email] = deepcopy(user)
        return True

    async def find_by_email(self, email: str) -> Optional[User]:
        user = self._users.get(normalize_email(email))
        return deepcopy(user) if user else None

    async def search(self, text: str = "", role: Optional[Role] = None) -> List[User]:
        needle = text.lower()
        matches = [
            user
            for user in self._users.values()
            if (role is None or user.role == role)
            and (not needle or needle in user.email or needle in (user.name or "").lower())
        ]
        return [deepcopy(user) for user in sorted(matches, key=lambda u: u.email)]

    async def set_role(self, email: str, role: Role) -> Optional[User]:
        user = self._users.get(normalize_email(email))
        if user is None:
            return None
        user.role = role
        return deepcopy(user)

    async def set_badge(self, email: str, badge: str) -> Optional[User]:
        user = self._users.get(normalize_email(email))
        if user is None:
            return None
        user.badge = badge
        return deepcopy(user)

    async def increment_meals_added(self, email: str, delta: int) -> None:
        user = self._users.get(normalize_email(email))
        if user is not None:
            user.meals_added = max(user.meals_added + delta, 0)

    def clear(self) -> None:
        """Clear all users (test utility, not part of the port)."""
        self._users.clear()
