"""Create meal request command and handler."""

from dataclasses import dataclass
import logging
from typing import Optional

from domain.meal.core.exceptions.meal_errors import MealNotFoundError
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal_request.core.entities.meal_request import MealRequest
from domain.meal_request.core.exceptions.request_errors import DuplicateMealRequestError
from domain.meal_request.core.ports.meal_request_repository import IMealRequestRepository
from domain.shared.identity import ensure_same_identity
from domain.user.core.exceptions.user_errors import MembershipRequiredError
from domain.user.core.ports.user_repository import IUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateMealRequestCommand:
    """
    Command: Request a catalog meal.

    Attributes:
        meal_id: Requested meal
        verified_email: Email from the verified token
        email: Email asserted by the client (optional)
    """

    meal_id: str
    verified_email: Optional[str]
    email: Optional[str] = None


class CreateMealRequestCommandHandler:
    """Handler for CreateMealRequestCommand."""

    def __init__(
        self,
        request_repository: IMealRequestRepository,
        meal_repository: IMealRepository,
        user_repository: IUserRepository,
    ):
        self._requests = request_repository
        self._meals = meal_repository
        self._users = user_repository

    async def handle(self, command: CreateMealRequestCommand) -> MealRequest:
        """
        Execute request creation.

        Flow:
        1. Verify identity
        2. Verify the meal exists
        3. Verify the caller holds a membership badge
        4. Insert unless a pending request for the same meal exists

        The meal title is copied onto the request and never refreshed.

        Raises:
            MealNotFoundError: If meal doesn't exist
            MembershipRequiredError: If caller has no membership
            DuplicateMealRequestError: If a pending request already exists
        """
        email = ensure_same_identity(command.verified_email, command.email)

        meal = await self._meals.find_by_id(command.meal_id)
        if meal is None:
            raise MealNotFoundError(command.meal_id)

        user = await self._users.find_by_email(email)
        if user is None or not user.has_membership:
            raise MembershipRequiredError(email)

        request = MealRequest.create(
            meal_id=meal.id,
            meal_title=meal.title,
            user_email=user.email,
            user_name=user.name,
            photo_url=user.photo,
        )
        if not await self._requests.insert_if_no_pending(request):
            raise DuplicateMealRequestError(meal.id, email)

        logger.info(
            "meal_request.created",
            extra={"request_id": request.id, "meal_id": meal.id},
        )
        return request
