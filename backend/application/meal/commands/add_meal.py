"""Add meal command and handler."""

from dataclasses import dataclass, field
import logging
from typing import List, Optional

from domain.meal.core.entities.meal import Meal
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.user.core.ports.user_repository import IUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddMealCommand:
    """
    Command: Add a meal to the catalog.

    Attributes:
        distributor_email: Verified email of the submitting admin
        title: Meal title
        category: Meal category
        price: Price in currency units
    """

    distributor_email: str
    title: str
    category: str
    price: float
    description: str = ""
    ingredients: List[str] = field(default_factory=list)
    image: Optional[str] = None
    distributor_name: Optional[str] = None


class AddMealCommandHandler:
    """Handler for AddMealCommand."""

    def __init__(self, meal_repository: IMealRepository, user_repository: IUserRepository):
        self._meals = meal_repository
        self._users = user_repository

    async def handle(self, command: AddMealCommand) -> Meal:
        """
        Create the meal with zeroed counters and credit the distributor.

        Raises:
            InvalidMealError: On missing title/category or negative price
        """
        meal = Meal.create(
            title=command.title,
            category=command.category,
            price=command.price,
            distributor_email=command.distributor_email,
            description=command.description,
            ingredients=command.ingredients,
            image=command.image,
            distributor_name=command.distributor_name,
        )

        await self._meals.insert(meal)
        await self._users.increment_meals_added(meal.distributor_email, 1)

        logger.info(
            "meal.added",
            extra={"meal_id": meal.id, "distributor": meal.distributor_email},
        )
        return meal
