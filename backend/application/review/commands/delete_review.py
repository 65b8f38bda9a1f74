"""Delete review command and handler."""

from dataclasses import dataclass
import logging
from typing import Optional

from domain.meal.core.exceptions.meal_errors import ReviewNotFoundError, ReviewOwnershipError
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.ports.review_repository import IReviewRepository
from domain.shared.identity import ensure_same_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteReviewCommand:
    review_id: str
    verified_email: Optional[str]


class DeleteReviewCommandHandler:
    """Handler for DeleteReviewCommand.

    Existence is checked before ownership, so a missing review is a 404
    for everybody.
    """

    def __init__(self, review_repository: IReviewRepository, meal_repository: IMealRepository):
        self._reviews = review_repository
        self._meals = meal_repository

    async def handle(self, command: DeleteReviewCommand) -> None:
        """
        Raises:
            ReviewNotFoundError: If review doesn't exist
            ReviewOwnershipError: If caller is not the author
        """
        email = ensure_same_identity(command.verified_email, None)

        review = await self._reviews.find_by_id(command.review_id)
        if review is None:
            raise ReviewNotFoundError(command.review_id)

        if not review.is_authored_by(email):
            raise ReviewOwnershipError(command.review_id)

        if not await self._reviews.delete(command.review_id):
            raise ReviewNotFoundError(command.review_id)

        # The meal may be gone already; its counter then has nothing to follow
        await self._meals.increment_reviews_count(review.meal_id, -1)

        logger.info(
            "review.deleted",
            extra={"review_id": command.review_id, "meal_id": review.meal_id},
        )
