"""Publish upcoming meal command and handler.

Promotion moves an upcoming meal into the catalog. The upcoming document is
removed with an atomic take, which is the guard against double publication:
among concurrent promoters exactly one gets the document. If the catalog
write fails after the take, the upcoming meal is put back.
"""

from dataclasses import dataclass
import logging
from typing import Optional

from domain.meal.core.entities.like import LikeTarget
from domain.meal.core.entities.meal import Meal
from domain.meal.core.entities.upcoming_meal import UpcomingMeal
from domain.meal.core.exceptions.meal_errors import UpcomingMealNotFoundError
from domain.meal.core.ports.like_repository import ILikeRepository
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.ports.upcoming_meal_repository import IUpcomingMealRepository
from domain.shared.errors import StoreError
from domain.shared.events import MealPromoted
from domain.shared.ports.event_bus import IEventBus
from domain.user.core.ports.user_repository import IUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishUpcomingMealCommand:
    """
    Command: Promote an upcoming meal into the catalog.

    Attributes:
        upcoming_id: Upcoming meal to publish
        automatic: True when triggered by the like threshold. An automatic
            promotion that loses the race is a silent no-op; an explicit
            admin publish of a missing meal is a 404.
    """

    upcoming_id: str
    automatic: bool = False


class PublishUpcomingMealCommandHandler:
    """Handler for PublishUpcomingMealCommand."""

    def __init__(
        self,
        upcoming_repository: IUpcomingMealRepository,
        meal_repository: IMealRepository,
        like_repository: ILikeRepository,
        user_repository: IUserRepository,
        event_bus: IEventBus,
    ):
        self._upcoming = upcoming_repository
        self._meals = meal_repository
        self._likes = like_repository
        self._users = user_repository
        self._event_bus = event_bus

    async def handle(self, command: PublishUpcomingMealCommand) -> Optional[Meal]:
        """
        Execute promotion.

        Flow:
        1. Atomically take the upcoming meal (remove + return)
        2. Build the catalog meal (new id, fresh post time, likes carried over)
        3. Insert it and re-key the like records to the new meal; on a store
           failure the upcoming meal is restored and the error re-raised
        4. Align the like counter with the records moved
        5. Credit the distributor's mealsAdded
        6. Publish MealPromoted

        Returns:
            The new catalog meal, or None if an automatic promotion lost the race

        Raises:
            UpcomingMealNotFoundError: Explicit publish of a missing upcoming meal
        """
        upcoming = await self._upcoming.take(command.upcoming_id)
        if upcoming is None:
            if command.automatic:
                logger.info(
                    "upcoming_meal.already_promoted",
                    extra={"upcoming_id": command.upcoming_id},
                )
                return None
            raise UpcomingMealNotFoundError(command.upcoming_id)

        meal = upcoming.promote()
        try:
            await self._meals.insert(meal)
        except StoreError:
            await self._roll_back(upcoming, None)
            raise
        try:
            moved = await self._likes.transfer(
                LikeTarget.UPCOMING_MEAL, upcoming.id, LikeTarget.MEAL, meal.id
            )
        except StoreError:
            await self._roll_back(upcoming, meal)
            raise

        # A toggle racing the take can leave one record more or less than the counter
        if moved != meal.likes:
            likes = await self._meals.increment_likes(meal.id, moved - meal.likes)
            if likes is not None:
                meal.likes = likes
        await self._users.increment_meals_added(meal.distributor_email, 1)

        logger.info(
            "upcoming_meal.published",
            extra={
                "upcoming_id": upcoming.id,
                "meal_id": meal.id,
                "likes": meal.likes,
                "likes_moved": moved,
                "automatic": command.automatic,
            },
        )

        await self._event_bus.publish(
            MealPromoted(
                upcoming_id=upcoming.id,
                meal_id=meal.id,
                title=meal.title,
                likes=meal.likes,
                automatic=command.automatic,
            )
        )
        return meal

    async def _roll_back(self, upcoming: UpcomingMeal, meal: Optional[Meal]) -> None:
        """Undo a half-done promotion so the upcoming meal is not lost.

        Failures here are logged; the caller re-raises the original error.
        """
        logger.warning(
            "upcoming_meal.promotion_rolled_back",
            extra={"upcoming_id": upcoming.id, "meal_id": meal.id if meal else None},
        )
        try:
            await self._upcoming.insert(upcoming)
            if meal is not None:
                await self._meals.delete(meal.id)
                await self._likes.transfer(
                    LikeTarget.MEAL, meal.id, LikeTarget.UPCOMING_MEAL, upcoming.id
                )
        except StoreError:
            logger.exception(
                "upcoming_meal.rollback_failed", extra={"upcoming_id": upcoming.id}
            )
