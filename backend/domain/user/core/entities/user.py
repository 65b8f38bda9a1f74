"""User entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from domain.shared.identity import normalize_email


DEFAULT_BADGE = "Bronze"


class Role(str, Enum):
    """User role."""

    USER = "user"
    ADMIN = "admin"


@dataclass
class User:
    """User profile.

    Primary key is the email (unique). Identity is verified externally;
    the user record only carries application data.

    Invariants:
    - email is normalized (lowercase, stripped) and immutable
    - meals_added is never negative
    - role is one of Role

    Examples:
        >>> user = User.create("Jane@Example.com", name="Jane")
        >>> user.email
        'jane@example.com'
        >>> user.badge
        'Bronze'
        >>> user.is_admin
        False
    """

    id: str
    email: str
    name: Optional[str] = None
    photo: Optional[str] = None
    role: Role = Role.USER
    meals_added: int = 0
    badge: str = DEFAULT_BADGE
    last_log_in: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not self.email or "@" not in self.email:
            raise ValueError(f"Invalid email: {self.email!r}")
        self.email = normalize_email(self.email)
        if self.meals_added < 0:
            raise ValueError("meals_added cannot be negative")

    @staticmethod
    def create(
        email: str,
        name: Optional[str] = None,
        photo: Optional[str] = None,
        signed_in_at: Optional[datetime] = None,
    ) -> "User":
        """Factory method for first sign-in.

        Callers cannot seed role, badge or counters: new users always start
        as plain users with the default badge.
        """
        return User(
            id=str(uuid4()),
            email=email,
            name=name,
            photo=photo,
            role=Role.USER,
            meals_added=0,
            badge=DEFAULT_BADGE,
            last_log_in=signed_in_at or datetime.now(timezone.utc),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def has_membership(self) -> bool:
        """True once a membership payment replaced the default badge."""
        return self.badge != DEFAULT_BADGE

    def to_dict(self) -> dict:
        return {
            "_id": self.id,
            "email": self.email,
            "name": self.name,
            "photo": self.photo,
            "role": self.role.value,
            "mealsAdded": self.meals_added,
            "badge": self.badge,
            "last_log_in": self.last_log_in.isoformat() if self.last_log_in else None,
        }
