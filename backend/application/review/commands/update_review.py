"""Update review command and handler."""

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Optional

from domain.meal.core.entities.review import Review, clean_text
from domain.meal.core.exceptions.meal_errors import ReviewNotFoundError, ReviewOwnershipError
from domain.meal.core.ports.review_repository import IReviewRepository
from domain.shared.identity import ensure_same_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateReviewCommand:
    review_id: str
    verified_email: Optional[str]
    text: Optional[str]


class UpdateReviewCommandHandler:
    """Handler for UpdateReviewCommand."""

    def __init__(self, repository: IReviewRepository):
        self._repository = repository

    async def handle(self, command: UpdateReviewCommand) -> Review:
        """
        Replace the review text (author only).

        Flow:
        1. Require a verified identity and non-blank text
        2. Verify the review exists (404)
        3. Verify the caller is the author (403)

        Raises:
            ReviewTextRequiredError: If text is blank
            ReviewNotFoundError: If review doesn't exist
            ReviewOwnershipError: If caller is not the author
        """
        email = ensure_same_identity(command.verified_email, None)
        text = clean_text(command.text)

        review = await self._repository.find_by_id(command.review_id)
        if review is None:
            raise ReviewNotFoundError(command.review_id)

        if not review.is_authored_by(email):
            raise ReviewOwnershipError(command.review_id)

        updated = await self._repository.update_text(
            command.review_id, text, datetime.now(timezone.utc)
        )
        if updated is None:
            raise ReviewNotFoundError(command.review_id)

        logger.info("review.updated", extra={"review_id": command.review_id})
        return updated
