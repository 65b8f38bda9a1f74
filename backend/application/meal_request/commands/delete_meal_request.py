"""Delete meal request command and handler."""

from dataclasses import dataclass
import logging
from typing import Optional

from domain.meal_request.core.exceptions.request_errors import MealRequestNotFoundError
from domain.meal_request.core.ports.meal_request_repository import IMealRequestRepository
from domain.shared.identity import ensure_same_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteMealRequestCommand:
    request_id: str
    verified_email: Optional[str]


class DeleteMealRequestCommandHandler:
    """Handler for DeleteMealRequestCommand.

    Deletion is keyed on (id, owner) in one operation, so "not yours" and
    "does not exist" both surface as MealRequestNotFoundError.
    """

    def __init__(self, repository: IMealRequestRepository):
        self._repository = repository

    async def handle(self, command: DeleteMealRequestCommand) -> None:
        email = ensure_same_identity(command.verified_email, None)

        if not await self._repository.delete_owned(command.request_id, email):
            raise MealRequestNotFoundError(command.request_id)

        logger.info("meal_request.deleted", extra={"request_id": command.request_id})
