"""In-memory upcoming meal repository implementation."""

from copy import deepcopy
from typing import Dict, List, Optional

from domain.meal.core.entities.upcoming_meal import UpcomingMeal
from domain.meal.core.ports.upcoming_meal_repository import IUpcomingMealRepository
from domain.shared.errors import StoreError


class InMemoryUpcomingMealRepository(IUpcomingMealRepository):
    """Dictionary-backed upcoming meals. take() pops, so only one caller wins."""

    def __init__(self) -> None:
        self._storage: Dict[str, UpcomingMeal] = {}

    async def insert(self, meal: UpcomingMeal) -> None:
        if meal.id in self._storage:
            raise StoreError(f"Duplicate upcoming meal id {meal.id}")
        self._storage[meal.id] = deepcopy(meal)

    async def find_by_id(self, upcoming_id: str) -> Optional[UpcomingMeal]:
        meal = self._storage.get(upcoming_id)
        return deepcopy(meal) if meal else None

    async def list_all(self) -> List[UpcomingMeal]:
        meals = sorted(self._storage.values(), key=lambda m: (-m.likes, m.created_at))
        return [deepcopy(meal) for meal in meals]

    async def increment_likes(self, upcoming_id: str, delta: int) -> Optional[int]:
        meal = self._storage.get(upcoming_id)
        if meal is None:
            return None
        meal.likes = max(meal.likes + delta, 0)
        return meal.likes

    async def take(self, upcoming_id: str) -> Optional[UpcomingMeal]:
        return self._storage.pop(upcoming_id, None)

    def clear(self) -> None:
        self._storage.clear()
