"""Review repository port (interface)."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from domain.meal.core.entities.review import Review
from domain.shared.pagination import Page


class IReviewRepository(ABC):
    """Repository interface for reviews."""

    @abstractmethod
    async def insert(self, review: Review) -> None:
        pass

    @abstractmethod
    async def find_by_id(self, review_id: str) -> Optional[Review]:
        pass

    @abstractmethod
    async def list_for_meal(self, meal_id: str) -> List[Review]:
        """Reviews of a meal, newest first."""
        pass

    @abstractmethod
    async def count_for_meal(self, meal_id: str) -> int:
        pass

    @abstractmethod
    async def list_by_email(self, email: str) -> List[Review]:
        """Reviews written by a user, newest first."""
        pass

    @abstractmethod
    async def list_all(self, page: int) -> Page[Review]:
        """All reviews, newest first, paginated."""
        pass

    @abstractmethod
    async def update_text(self, review_id: str, text: str, updated_at: datetime) -> Optional[Review]:
        pass

    @abstractmethod
    async def delete(self, review_id: str) -> bool:
        pass
