"""Create review command and handler."""

from dataclasses import dataclass
import logging
from typing import Optional

from domain.meal.core.entities.review import Review, clean_text
from domain.meal.core.exceptions.meal_errors import MealNotFoundError
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.ports.review_repository import IReviewRepository
from domain.shared.identity import ensure_same_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateReviewCommand:
    """
    Command: Review a catalog meal.

    Attributes:
        meal_id: Reviewed meal
        verified_email: Email from the verified token
        text: Review text (non-empty)
        email: Email asserted by the client (optional)
        username: Display name snapshot
        photo_url: Avatar snapshot
    """

    meal_id: str
    verified_email: Optional[str]
    text: Optional[str]
    email: Optional[str] = None
    username: Optional[str] = None
    photo_url: Optional[str] = None


class CreateReviewCommandHandler:
    """Handler for CreateReviewCommand."""

    def __init__(self, review_repository: IReviewRepository, meal_repository: IMealRepository):
        self._reviews = review_repository
        self._meals = meal_repository

    async def handle(self, command: CreateReviewCommand) -> Review:
        """
        Insert the review and bump the meal's reviews_count.

        Raises:
            AuthenticationError: If there is no verified identity
            AuthorizationError: If the asserted email is not the verified one
            ReviewTextRequiredError: If text is blank
            MealNotFoundError: If meal doesn't exist
        """
        email = ensure_same_identity(command.verified_email, command.email)
        text = clean_text(command.text)

        meal = await self._meals.find_by_id(command.meal_id)
        if meal is None:
            raise MealNotFoundError(command.meal_id)

        review = Review.create(
            meal_id=meal.id,
            meal_title=meal.title,
            email=email,
            text=text,
            username=command.username,
            photo_url=command.photo_url,
        )
        await self._reviews.insert(review)
        await self._meals.increment_reviews_count(meal.id, 1)

        logger.info("review.created", extra={"review_id": review.id, "meal_id": meal.id})
        return review
