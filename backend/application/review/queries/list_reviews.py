"""Review listing queries."""

from dataclasses import dataclass
from typing import List

from domain.meal.core.entities.review import Review
from domain.meal.core.exceptions.meal_errors import MealNotFoundError
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.ports.review_repository import IReviewRepository
from domain.shared.identity import normalize_email
from domain.shared.pagination import Page


@dataclass
class ListReviewsQuery:
    """Read-only review listings.

    Examples:
        >>> query = ListReviewsQuery(review_repository, meal_repository)
        >>> reviews = await query.for_meal("meal-1")
        >>> page = await query.all(page=2)
    """

    review_repository: IReviewRepository
    meal_repository: IMealRepository

    async def for_meal(self, meal_id: str) -> List[Review]:
        """Reviews of an existing meal, newest first.

        Raises:
            MealNotFoundError: If meal doesn't exist
        """
        if await self.meal_repository.find_by_id(meal_id) is None:
            raise MealNotFoundError(meal_id)
        return await self.review_repository.list_for_meal(meal_id)

    async def by_author(self, email: str) -> List[Review]:
        return await self.review_repository.list_by_email(normalize_email(email))

    async def all(self, page: int = 1) -> Page[Review]:
        return await self.review_repository.list_all(max(page, 1))
