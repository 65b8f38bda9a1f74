"""Toggle like on an upcoming meal, promoting it at the like threshold."""

from dataclasses import dataclass
import logging
from typing import Any, Dict, Optional

from application.upcoming_meal.commands.publish_upcoming_meal import (
    PublishUpcomingMealCommand,
    PublishUpcomingMealCommandHandler,
)
from domain.meal.core.entities.like import LikeTarget
from domain.meal.core.exceptions.meal_errors import UpcomingMealNotFoundError
from domain.meal.core.ports.like_repository import ILikeRepository
from domain.meal.core.ports.upcoming_meal_repository import IUpcomingMealRepository
from domain.meal.core.services.like_toggler import LikeToggler
from domain.shared.identity import ensure_same_identity

logger = logging.getLogger(__name__)

DEFAULT_PROMOTION_THRESHOLD = 10


@dataclass(frozen=True)
class ToggleUpcomingLikeCommand:
    upcoming_id: str
    verified_email: Optional[str]
    email: Optional[str] = None


@dataclass(frozen=True)
class UpcomingLikeResult:
    """Toggle outcome; promoted_meal_id is set when this like published the meal."""

    likes: int
    liked: bool
    promoted_meal_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "likes": self.likes,
            "liked": self.liked,
            "promoted": self.promoted_meal_id is not None,
            "mealId": self.promoted_meal_id,
        }


class ToggleUpcomingLikeCommandHandler:
    """Handler for ToggleUpcomingLikeCommand.

    After a like (never after an unlike) brings the counter to the threshold
    or above, the meal is promoted through PublishUpcomingMealCommandHandler.
    """

    def __init__(
        self,
        upcoming_repository: IUpcomingMealRepository,
        like_repository: ILikeRepository,
        publisher: PublishUpcomingMealCommandHandler,
        threshold: int = DEFAULT_PROMOTION_THRESHOLD,
    ):
        if threshold < 1:
            raise ValueError("Promotion threshold must be at least 1")
        self._upcoming = upcoming_repository
        self._publisher = publisher
        self._threshold = threshold
        self._toggler = LikeToggler(
            like_repository,
            upcoming_repository,
            LikeTarget.UPCOMING_MEAL,
            UpcomingMealNotFoundError,
        )

    async def handle(self, command: ToggleUpcomingLikeCommand) -> UpcomingLikeResult:
        """
        Raises:
            AuthenticationError: If there is no verified identity
            AuthorizationError: If the asserted email is not the verified one
            UpcomingMealNotFoundError: If the upcoming meal doesn't exist
        """
        email = ensure_same_identity(command.verified_email, command.email)

        if await self._upcoming.find_by_id(command.upcoming_id) is None:
            raise UpcomingMealNotFoundError(command.upcoming_id)

        state = await self._toggler.toggle(command.upcoming_id, email)

        if not state.liked or state.likes < self._threshold:
            return UpcomingLikeResult(likes=state.likes, liked=state.liked)

        meal = await self._publisher.handle(
            PublishUpcomingMealCommand(upcoming_id=command.upcoming_id, automatic=True)
        )
        return UpcomingLikeResult(
            likes=state.likes,
            liked=True,
            promoted_meal_id=meal.id if meal else None,
        )
