"""Serve meal request command and handler (admin)."""

from dataclasses import dataclass
from datetime import datetime, timezone
import logging

from domain.meal_request.core.entities.meal_request import MealRequest
from domain.meal_request.core.exceptions.request_errors import (
    MealRequestNotFoundError,
    RequestAlreadyServedError,
)
from domain.meal_request.core.ports.meal_request_repository import IMealRequestRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServeMealRequestCommand:
    request_id: str


class ServeMealRequestCommandHandler:
    """Handler for ServeMealRequestCommand. pending -> delivered, one way."""

    def __init__(self, repository: IMealRequestRepository):
        self._repository = repository

    async def handle(self, command: ServeMealRequestCommand) -> MealRequest:
        """
        Raises:
            MealRequestNotFoundError: If request doesn't exist
            RequestAlreadyServedError: If request was already delivered
        """
        request = await self._repository.find_by_id(command.request_id)
        if request is None:
            raise MealRequestNotFoundError(command.request_id)
        if not request.is_pending:
            raise RequestAlreadyServedError(command.request_id)

        served = await self._repository.mark_delivered(
            command.request_id, datetime.now(timezone.utc)
        )
        if served is None:
            # Another admin served it between lookup and update
            raise RequestAlreadyServedError(command.request_id)

        logger.info("meal_request.served", extra={"request_id": command.request_id})
        return served
