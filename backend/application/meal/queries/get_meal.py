"""Get meal detail query."""

from dataclasses import dataclass
from typing import Any, Dict, List

from domain.meal.core.entities.like import LikeTarget
from domain.meal.core.entities.meal import Meal
from domain.meal.core.entities.review import Review
from domain.meal.core.exceptions.meal_errors import MealNotFoundError
from domain.meal.core.ports.like_repository import ILikeRepository
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.ports.review_repository import IReviewRepository


@dataclass(frozen=True)
class GetMealQuery:
    meal_id: str


@dataclass(frozen=True)
class MealDetail:
    """A meal with its reviews and the users liking it."""

    meal: Meal
    reviews: List[Review]
    review_count: int
    liked_by: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meal": {**self.meal.to_dict(), "likedBy": list(self.liked_by)},
            "reviews": [review.to_dict() for review in self.reviews],
            "reviewCount": self.review_count,
        }


class GetMealQueryHandler:
    """Handler for GetMealQuery."""

    def __init__(
        self,
        meal_repository: IMealRepository,
        review_repository: IReviewRepository,
        like_repository: ILikeRepository,
    ):
        self._meals = meal_repository
        self._reviews = review_repository
        self._likes = like_repository

    async def handle(self, query: GetMealQuery) -> MealDetail:
        """
        Raises:
            MealNotFoundError: If meal doesn't exist
        """
        meal = await self._meals.find_by_id(query.meal_id)
        if meal is None:
            raise MealNotFoundError(query.meal_id)

        reviews = await self._reviews.list_for_meal(meal.id)
        liked_by = await self._likes.liked_by(LikeTarget.MEAL, meal.id)

        return MealDetail(
            meal=meal,
            reviews=reviews,
            review_count=len(reviews),
            liked_by=liked_by,
        )
