"""UpcomingMeal entity - candidate meal collecting community votes."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from domain.meal.core.entities.meal import Meal, validate_details
from domain.shared.identity import normalize_email


@dataclass
class UpcomingMeal:
    """Upcoming meal.

    Lifecycle: created by submission, mutated by like/unlike, then promoted
    into the catalog exactly once (threshold reached or admin publish).
    Promotion is a state transition: the upcoming document is removed.
    """

    id: str
    title: str
    category: str
    price: float
    distributor_email: str
    created_at: datetime
    description: str = ""
    ingredients: List[str] = field(default_factory=list)
    image: Optional[str] = None
    distributor_name: Optional[str] = None
    likes: int = 0

    def __post_init__(self) -> None:
        validate_details(self.title, self.category, self.price)
        self.distributor_email = normalize_email(self.distributor_email)
        if self.likes < 0:
            self.likes = 0

    @staticmethod
    def create(
        title: str,
        category: str,
        price: float,
        distributor_email: str,
        description: str = "",
        ingredients: Optional[List[str]] = None,
        image: Optional[str] = None,
        distributor_name: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> "UpcomingMeal":
        return UpcomingMeal(
            id=str(uuid4()),
            title=title.strip(),
            category=category.strip(),
            price=float(price),
            distributor_email=distributor_email,
            description=description,
            ingredients=list(ingredients or []),
            image=image,
            distributor_name=distributor_name,
            created_at=created_at or datetime.now(timezone.utc),
        )

    def promote(self, published_at: Optional[datetime] = None) -> Meal:
        """Build the catalog meal this upcoming meal turns into.

        The catalog meal gets a fresh identifier and post time; the
        upcoming identifier is dropped. Likes carry over.
        """
        meal = Meal.create(
            title=self.title,
            category=self.category,
            price=self.price,
            distributor_email=self.distributor_email,
            description=self.description,
            ingredients=self.ingredients,
            image=self.image,
            distributor_name=self.distributor_name,
            post_time=published_at or datetime.now(timezone.utc),
        )
        meal.likes = self.likes
        return meal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "title": self.title,
            "category": self.category,
            "price": self.price,
            "description": self.description,
            "ingredients": list(self.ingredients),
            "image": self.image,
            "distributorEmail": self.distributor_email,
            "distributorName": self.distributor_name,
            "likes": self.likes,
            "createdAt": self.created_at.isoformat(),
        }
