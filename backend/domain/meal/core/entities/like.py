"""Like record - presence of the record is the toggle state."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from domain.shared.identity import normalize_email


class LikeTarget(str, Enum):
    """Kind of entity a like refers to."""

    MEAL = "meal"
    UPCOMING_MEAL = "upcoming_meal"


@dataclass(frozen=True)
class Like:
    """At most one Like exists per (target, entity_id, email)."""

    id: str
    target: LikeTarget
    entity_id: str
    email: str
    liked_at: datetime

    @staticmethod
    def create(
        target: LikeTarget,
        entity_id: str,
        email: str,
        liked_at: Optional[datetime] = None,
    ) -> "Like":
        return Like(
            id=str(uuid4()),
            target=target,
            entity_id=entity_id,
            email=normalize_email(email),
            liked_at=liked_at or datetime.now(timezone.utc),
        )


@dataclass(frozen=True)
class LikeState:
    """Outcome of a toggle: resulting counter and whether the caller now likes."""

    likes: int
    liked: bool
