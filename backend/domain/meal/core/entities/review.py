"""Review entity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from domain.meal.core.exceptions.meal_errors import ReviewTextRequiredError
from domain.shared.identity import normalize_email


@dataclass
class Review:
    """Review written by a user about a catalog meal.

    meal_title is a snapshot taken at creation time and is never refreshed.
    Only the author (email) may edit or delete the review.
    """

    id: str
    meal_id: str
    meal_title: str
    email: str
    text: str
    created_at: datetime
    updated_at: datetime
    username: Optional[str] = None
    photo_url: Optional[str] = None

    def __post_init__(self) -> None:
        self.email = normalize_email(self.email)

    @staticmethod
    def create(
        meal_id: str,
        meal_title: str,
        email: str,
        text: str,
        username: Optional[str] = None,
        photo_url: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> "Review":
        now = created_at or datetime.now(timezone.utc)
        return Review(
            id=str(uuid4()),
            meal_id=meal_id,
            meal_title=meal_title,
            email=email,
            text=clean_text(text),
            username=username,
            photo_url=photo_url,
            created_at=now,
            updated_at=now,
        )

    def is_authored_by(self, email: str) -> bool:
        return normalize_email(email) == self.email

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "mealId": self.meal_id,
            "mealTitle": self.meal_title,
            "email": self.email,
            "username": self.username,
            "photoURL": self.photo_url,
            "text": self.text,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


def clean_text(text: Optional[str]) -> str:
    """Strip review text, rejecting blank input."""
    if text is None or not text.strip():
        raise ReviewTextRequiredError()
    return text.strip()
