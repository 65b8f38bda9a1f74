"""Domain events.

Events are immutable records of facts that occurred. They are published on the
event bus after the state change they describe has been persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """Base class for domain events.

    Attributes:
        event_id: Unique identifier for this event instance.
        occurred_at: When the event occurred (UTC timezone-aware).

    Raises:
        ValueError: If occurred_at is not timezone-aware.
    """

    event_id: UUID = field(default_factory=uuid4, kw_only=True)
    occurred_at: datetime = field(default_factory=_now, kw_only=True)

    def __post_init__(self) -> None:
        if self.occurred_at.tzinfo is None:
            raise ValueError("occurred_at must be timezone-aware (use UTC)")


@dataclass(frozen=True)
class UserRegistered(DomainEvent):
    """A user signed in for the first time."""

    email: str


@dataclass(frozen=True)
class MealPromoted(DomainEvent):
    """An upcoming meal was moved into the catalog."""

    upcoming_id: str
    meal_id: str
    title: str
    likes: int
    automatic: bool


@dataclass(frozen=True)
class PaymentRecorded(DomainEvent):
    """A membership payment was appended to the ledger."""

    payment_id: str
    email: str
    membership_id: str
    amount: float
    badge: str
