"""Domain exceptions for the Meal bounded context."""

from domain.meal.core.exceptions.meal_errors import (
    InvalidMealError,
    InvalidRatingError,
    MealNotFoundError,
    MealOwnershipError,
    ReviewNotFoundError,
    ReviewOwnershipError,
    ReviewTextRequiredError,
    UpcomingMealNotFoundError,
)

__all__ = [
    "InvalidMealError",
    "InvalidRatingError",
    "MealNotFoundError",
    "MealOwnershipError",
    "ReviewNotFoundError",
    "ReviewOwnershipError",
    "ReviewTextRequiredError",
    "UpcomingMealNotFoundError",
]
