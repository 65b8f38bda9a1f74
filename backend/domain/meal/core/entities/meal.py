"""Meal entity - catalog item offered by a distributor."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from domain.meal.core.exceptions.meal_errors import InvalidMealError
from domain.shared.identity import normalize_email


RATING_VALUES = (1, 2, 3, 4, 5)

# Fields a distributor may change after submission. Counters, ownership,
# identifiers and timestamps are maintained by the system.
EDITABLE_FIELDS = frozenset(
    {"title", "category", "price", "description", "ingredients", "image"}
)


def validate_details(title: str, category: str, price: float) -> None:
    """Validate the fields every meal (catalog or upcoming) must carry."""
    if not title or not title.strip():
        raise InvalidMealError("Meal title required")
    if not category or not category.strip():
        raise InvalidMealError("Meal category required")
    if price is None or price < 0:
        raise InvalidMealError("Meal price must be a non-negative number")


def validate_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Check an edit payload only touches editable fields."""
    if not changes:
        raise InvalidMealError("No changes provided")
    forbidden = set(changes) - EDITABLE_FIELDS
    if forbidden:
        raise InvalidMealError(f"Fields not editable: {', '.join(sorted(forbidden))}")
    if "price" in changes and (changes["price"] is None or changes["price"] < 0):
        raise InvalidMealError("Meal price must be a non-negative number")
    for key in ("title", "category"):
        if key in changes and not (changes[key] or "").strip():
            raise InvalidMealError(f"Meal {key} required")
    return changes


def empty_histogram() -> Dict[int, int]:
    return {value: 0 for value in RATING_VALUES}


@dataclass
class Meal:
    """Catalog meal.

    Invariants:
    - likes and reviews_count are never negative
    - ratings histogram has one bucket per rating value 1..5
    - user_ratings maps each rater email to the bucket it is counted in

    Examples:
        >>> meal = Meal.create(
        ...     title="Paneer Tikka",
        ...     category="Dinner",
        ...     price=12.5,
        ...     distributor_email="chef@bitelog.io",
        ... )
        >>> meal.likes, meal.reviews_count
        (0, 0)
        >>> meal.average_rating
        0.0
    """

    id: str
    title: str
    category: str
    price: float
    distributor_email: str
    post_time: datetime
    description: str = ""
    ingredients: List[str] = field(default_factory=list)
    image: Optional[str] = None
    distributor_name: Optional[str] = None
    rating: float = 0.0
    likes: int = 0
    reviews_count: int = 0
    ratings: Dict[int, int] = field(default_factory=empty_histogram)
    user_ratings: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_details(self.title, self.category, self.price)
        self.distributor_email = normalize_email(self.distributor_email)
        if self.likes < 0:
            self.likes = 0
        if self.reviews_count < 0:
            raise InvalidMealError("reviews_count cannot be negative")
        self.ratings = {**empty_histogram(), **self.ratings}

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
        post_time: Optional[datetime] = None,
    ) -> "Meal":
        """Factory method for a new catalog meal with zeroed counters."""
        return Meal(
            id=str(uuid4()),
            title=title.strip(),
            category=category.strip(),
            price=float(price),
            distributor_email=distributor_email,
            description=description,
            ingredients=list(ingredients or []),
            image=image,
            distributor_name=distributor_name,
            post_time=post_time or datetime.now(timezone.utc),
        )

    @property
    def ratings_count(self) -> int:
        return sum(self.ratings.values())

    @property
    def average_rating(self) -> float:
        """Average of the histogram, or the seeded rating when nobody rated yet."""
        total = self.ratings_count
        if total == 0:
            return float(self.rating)
        weighted = sum(value * count for value, count in self.ratings.items())
        return round(weighted / total, 2)

    def is_managed_by(self, email: str, is_admin: bool) -> bool:
        return is_admin or normalize_email(email) == self.distributor_email

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
            "rating": self.average_rating,
            "likes": self.likes,
            "reviews_count": self.reviews_count,
            "ratings": {str(k): v for k, v in self.ratings.items()},
            "postTime": self.post_time.isoformat(),
        }
