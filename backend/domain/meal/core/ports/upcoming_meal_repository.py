"""Upcoming meal repository port (interface)."""

from abc import ABC, abstractmethod
from typing import List, Optional

from domain.meal.core.entities.upcoming_meal import UpcomingMeal


class IUpcomingMealRepository(ABC):
    """Repository interface for upcoming meals."""

    @abstractmethod
    async def insert(self, meal: UpcomingMeal) -> None:
        pass

    @abstractmethod
    async def find_by_id(self, upcoming_id: str) -> Optional[UpcomingMeal]:
        pass

    @abstractmethod
    async def list_all(self) -> List[UpcomingMeal]:
        """All upcoming meals, most liked first, then oldest first."""
        pass

    @abstractmethod
    async def increment_likes(self, upcoming_id: str, delta: int) -> Optional[int]:
        """Atomically add delta to likes, floored at 0; None if absent."""
        pass

    @abstractmethod
    async def take(self, upcoming_id: str) -> Optional[UpcomingMeal]:
        """Atomically remove and return the upcoming meal.

        This is the promotion guard: among concurrent callers at most one
        receives the document, the others get None.
        """
        pass
