"""Meal repository port (interface)."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from domain.meal.core.entities.meal import Meal
from domain.meal.core.value_objects.catalog_query import CatalogQuery
from domain.meal.core.value_objects.rating import RatingChange
from domain.shared.pagination import Page


class IMealRepository(ABC):
    """Repository interface for catalog meals.

    Counter fields (likes, reviews_count, ratings) are only changed through
    the dedicated atomic operations below, never by saving a whole entity.
    """

    @abstractmethod
    async def insert(self, meal: Meal) -> None:
        """Persist a new meal."""
        pass

    @abstractmethod
    async def find_by_id(self, meal_id: str) -> Optional[Meal]:
        """Find meal by id, None if absent."""
        pass

    @abstractmethod
    async def search(self, query: CatalogQuery) -> Page[Meal]:
        """Run a catalog query.

        Args:
            query: Normalized filters, ordering and page

        Returns:
            Page of at most query.page_size meals plus the total match count

        Note:
            With query.search set, matches are ranked by text relevance over
            title, description, category and ingredients, and the requested
            sort is ignored.
        """
        pass

    @abstractmethod
    async def update_fields(self, meal_id: str, changes: Dict[str, Any]) -> Optional[Meal]:
        """Apply an edit of editable fields, returning the updated meal."""
        pass

    @abstractmethod
    async def delete(self, meal_id: str) -> bool:
        """Delete meal, True if it existed."""
        pass

    @abstractmethod
    async def increment_likes(self, meal_id: str, delta: int) -> Optional[int]:
        """Atomically add delta (+1/-1) to likes, floored at 0.

        Returns:
            Resulting counter, or None if the meal does not exist
        """
        pass

    @abstractmethod
    async def increment_reviews_count(self, meal_id: str, delta: int) -> Optional[int]:
        """Atomically add delta to reviews_count, floored at 0."""
        pass

    @abstractmethod
    async def record_rating(self, meal_id: str, email: str, value: int) -> Optional[RatingChange]:
        """Record or change a user's rating.

        First rating: increments the bucket of value and reviews_count.
        Change: moves the user from the old bucket to the new one in a single
        conditional update. Same value: no-op.

        Returns:
            The change applied, or None if the meal does not exist
        """
        pass

    @abstractmethod
    async def count_by_distributor(self, email: str) -> int:
        pass

    @abstractmethod
    async def find_by_distributor(self, email: str) -> List[Meal]:
        """Meals of a distributor, newest first."""
        pass

    @abstractmethod
    async def distinct_categories(self) -> List[str]:
        """Distinct category values, sorted."""
        pass
