"""Toggle like on a catalog meal."""

from dataclasses import dataclass
import logging
from typing import Optional

from domain.meal.core.entities.like import LikeState, LikeTarget
from domain.meal.core.exceptions.meal_errors import MealNotFoundError
from domain.meal.core.ports.like_repository import ILikeRepository
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.services.like_toggler import LikeToggler
from domain.shared.identity import ensure_same_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleMealLikeCommand:
    """
    Command: Like a meal, or unlike it if already liked.

    Attributes:
        meal_id: Target meal
        verified_email: Email from the verified token
        email: Email asserted by the client (optional)
    """

    meal_id: str
    verified_email: Optional[str]
    email: Optional[str] = None


class ToggleMealLikeCommandHandler:
    """Handler for ToggleMealLikeCommand."""

    def __init__(self, meal_repository: IMealRepository, like_repository: ILikeRepository):
        self._meals = meal_repository
        self._toggler = LikeToggler(
            like_repository, meal_repository, LikeTarget.MEAL, MealNotFoundError
        )

    async def handle(self, command: ToggleMealLikeCommand) -> LikeState:
        """
        Raises:
            AuthenticationError: If there is no verified identity
            AuthorizationError: If the asserted email is not the verified one
            MealNotFoundError: If meal doesn't exist
        """
        email = ensure_same_identity(command.verified_email, command.email)

        if await self._meals.find_by_id(command.meal_id) is None:
            raise MealNotFoundError(command.meal_id)

        return await self._toggler.toggle(command.meal_id, email)
