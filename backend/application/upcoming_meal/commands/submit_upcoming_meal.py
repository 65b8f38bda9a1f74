"""Submit upcoming meal command and handler."""

from dataclasses import dataclass, field
import logging
from typing import List, Optional

from domain.meal.core.entities.upcoming_meal import UpcomingMeal
from domain.meal.core.ports.upcoming_meal_repository import IUpcomingMealRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitUpcomingMealCommand:
    distributor_email: str
    title: str
    category: str
    price: float
    description: str = ""
    ingredients: List[str] = field(default_factory=list)
    image: Optional[str] = None
    distributor_name: Optional[str] = None


class SubmitUpcomingMealCommandHandler:
    """Handler for SubmitUpcomingMealCommand. New upcoming meals start at 0 likes."""

    def __init__(self, repository: IUpcomingMealRepository):
        self._repository = repository

    async def handle(self, command: SubmitUpcomingMealCommand) -> UpcomingMeal:
        upcoming = UpcomingMeal.create(
            title=command.title,
            category=command.category,
            price=command.price,
            distributor_email=command.distributor_email,
            description=command.description,
            ingredients=command.ingredients,
            image=command.image,
            distributor_name=command.distributor_name,
        )
        await self._repository.insert(upcoming)

        logger.info("upcoming_meal.submitted", extra={"upcoming_id": upcoming.id})
        return upcoming
