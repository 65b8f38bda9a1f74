"""Repository ports for the meal domain."""

from domain.meal.core.ports.like_repository import ILikeRepository, ILikeCounter
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.ports.review_repository import IReviewRepository
from domain.meal.core.ports.upcoming_meal_repository import IUpcomingMealRepository

__all__ = [
    "ILikeCounter",
    "ILikeRepository",
    "IMealRepository",
    "IReviewRepository",
    "IUpcomingMealRepository",
]
