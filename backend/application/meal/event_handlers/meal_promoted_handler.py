"""Handler for MealPromoted domain event."""

import logging

from domain.shared.events import MealPromoted

logger = logging.getLogger(__name__)


class MealPromotedHandler:
    """Handler for MealPromoted domain events.

    Side effects only - does NOT modify system state.
    """

    async def handle(self, event: MealPromoted) -> None:
        logger.info(
            "meal.promoted",
            extra={
                "upcoming_id": event.upcoming_id,
                "meal_id": event.meal_id,
                "title": event.title,
                "likes": event.likes,
                "automatic": event.automatic,
                "promoted_at": event.occurred_at.isoformat(),
            },
        )
