"""Delete meal command and handler.

Allows distributors (and admins) to remove catalog meals. Like records of
the meal are removed with it; reviews are kept as history.
"""

from dataclasses import dataclass
import logging

from domain.meal.core.entities.like import LikeTarget
from domain.meal.core.exceptions.meal_errors import MealNotFoundError, MealOwnershipError
from domain.meal.core.ports.like_repository import ILikeRepository
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.user.core.ports.user_repository import IUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteMealCommand:
    """
    Command: Delete meal.

    Attributes:
        meal_id: Meal to delete
        requester_email: Verified caller
        requester_is_admin: Whether the caller holds the admin role
    """

    meal_id: str
    requester_email: str
    requester_is_admin: bool = False


class DeleteMealCommandHandler:
    """Handler for DeleteMealCommand."""

    def __init__(
        self,
        meal_repository: IMealRepository,
        like_repository: ILikeRepository,
        user_repository: IUserRepository,
    ):
        self._meals = meal_repository
        self._likes = like_repository
        self._users = user_repository

    async def handle(self, command: DeleteMealCommand) -> None:
        """
        Execute delete command.

        Flow:
        1. Verify meal exists
        2. Verify the caller is the distributor or an admin
        3. Delete the meal, then its likes
        4. Decrement the distributor's mealsAdded (floored at 0)

        Raises:
            MealNotFoundError: If meal doesn't exist
            MealOwnershipError: If caller may not delete the meal
        """
        meal = await self._meals.find_by_id(command.meal_id)
        if meal is None:
            raise MealNotFoundError(command.meal_id)

        if not meal.is_managed_by(command.requester_email, command.requester_is_admin):
            raise MealOwnershipError(command.meal_id)

        deleted = await self._meals.delete(command.meal_id)
        if not deleted:
            # Concurrent delete won; nothing left to clean up on our side
            raise MealNotFoundError(command.meal_id)

        removed_likes = await self._likes.delete_for(LikeTarget.MEAL, command.meal_id)
        await self._users.increment_meals_added(meal.distributor_email, -1)

        logger.info(
            "meal.deleted",
            extra={
                "meal_id": command.meal_id,
                "distributor": meal.distributor_email,
                "likes_removed": removed_likes,
            },
        )
