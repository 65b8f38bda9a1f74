"""List categories query."""

from typing import List

from domain.meal.core.ports.meal_repository import IMealRepository


class ListCategoriesQueryHandler:
    def __init__(self, repository: IMealRepository):
        self._repository = repository

    async def handle(self) -> List[str]:
        """Distinct catalog categories, sorted."""
        return await self._repository.distinct_categories()
