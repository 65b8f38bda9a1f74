"""Rate meal command and handler.

Ratings are mutable: a second rating by the same user moves them from the
old histogram bucket to the new one. Only the first rating counts towards
reviews_count.
"""

from dataclasses import dataclass
import logging
from typing import Any, Optional

from domain.meal.core.entities.meal import Meal
from domain.meal.core.exceptions.meal_errors import MealNotFoundError
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.value_objects.rating import Rating
from domain.shared.identity import ensure_same_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateMealCommand:
    meal_id: str
    verified_email: Optional[str]
    rating: Any
    email: Optional[str] = None


class RateMealCommandHandler:
    """Handler for RateMealCommand."""

    def __init__(self, repository: IMealRepository):
        self._repository = repository

    async def handle(self, command: RateMealCommand) -> Meal:
        """
        Record the rating and return the meal with its refreshed aggregate.

        Raises:
            AuthenticationError: If there is no verified identity
            AuthorizationError: If the asserted email is not the verified one
            InvalidRatingError: If rating is not an integer in 1..5
            MealNotFoundError: If meal doesn't exist
        """
        email = ensure_same_identity(command.verified_email, command.email)
        rating = Rating.parse(command.rating)

        change = await self._repository.record_rating(command.meal_id, email, rating.value)
        if change is None:
            raise MealNotFoundError(command.meal_id)

        logger.info(
            "meal.rated",
            extra={
                "meal_id": command.meal_id,
                "previous": change.previous,
                "current": change.current,
            },
        )

        meal = await self._repository.find_by_id(command.meal_id)
        if meal is None:
            raise MealNotFoundError(command.meal_id)
        return meal
