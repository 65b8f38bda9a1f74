"""List upcoming meals query."""

from typing import List

from domain.meal.core.entities.upcoming_meal import UpcomingMeal
from domain.meal.core.exceptions.meal_errors import UpcomingMealNotFoundError
from domain.meal.core.ports.upcoming_meal_repository import IUpcomingMealRepository


class ListUpcomingMealsQueryHandler:
    """Upcoming meals, most liked first, ties broken by submission time."""

    def __init__(self, repository: IUpcomingMealRepository):
        self._repository = repository

    async def handle(self) -> List[UpcomingMeal]:
        return await self._repository.list_all()

    async def get(self, upcoming_id: str) -> UpcomingMeal:
        upcoming = await self._repository.find_by_id(upcoming_id)
        if upcoming is None:
            raise UpcomingMealNotFoundError(upcoming_id)
        return upcoming
