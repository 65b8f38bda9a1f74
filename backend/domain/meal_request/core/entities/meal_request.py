"""MealRequest entity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4

from domain.meal_request.core.exceptions.request_errors import RequestAlreadyServedError
from domain.shared.identity import normalize_email


class RequestStatus(str, Enum):
    PENDING = "pending"
    DELIVERED = "delivered"


@dataclass
class MealRequest:
    """Request of a user for a catalog meal.

    Status moves pending -> delivered only. meal_title is a snapshot taken
    at request time and is never refreshed.
    """

    id: str
    meal_id: str
    meal_title: str
    user_email: str
    created_at: datetime
    user_name: Optional[str] = None
    photo_url: Optional[str] = None
    status: RequestStatus = RequestStatus.PENDING
    served_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.user_email = normalize_email(self.user_email)

    @staticmethod
    def create(
        meal_id: str,
        meal_title: str,
        user_email: str,
        user_name: Optional[str] = None,
        photo_url: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> "MealRequest":
        return MealRequest(
            id=str(uuid4()),
            meal_id=meal_id,
            meal_title=meal_title,
            user_email=user_email,
            user_name=user_name,
            photo_url=photo_url,
            created_at=created_at or datetime.now(timezone.utc),
        )

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def serve(self, served_at: Optional[datetime] = None) -> None:
        """Transition pending -> delivered."""
        if not self.is_pending:
            raise RequestAlreadyServedError(self.id)
        self.status = RequestStatus.DELIVERED
        self.served_at = served_at or datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "mealId": self.meal_id,
            "mealTitle": self.meal_title,
            "userEmail": self.user_email,
            "userName": self.user_name,
            "photoURL": self.photo_url,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
            "servedAt": self.served_at.isoformat() if self.served_at else None,
        }
