"""In-memory meal repository implementation.

Provides an in-memory implementation of IMealRepository port for testing
and local runs. Uses a dictionary for storage with no external dependencies.
"""

from copy import deepcopy
import re
from typing import Any, Dict, List, Optional

from domain.meal.core.entities.meal import Meal
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.value_objects.catalog_query import CatalogQuery, SortOrder
from domain.meal.core.value_objects.rating import RatingChange
from domain.shared.errors import StoreError
from domain.shared.identity import normalize_email
from domain.shared.pagination import Page

# Text relevance weights, mirroring the MongoDB text index
TEXT_WEIGHTS = {"title": 10, "description": 1, "category": 5, "ingredients": 3}

_WORD = re.compile(r"\w+")


def relevance(meal: Meal, search: str) -> int:
    """Weighted count of search terms found in the indexed fields (0 = no match)."""
    terms = set(_WORD.findall(search.lower()))
    if not terms:
        return 0

    fields = {
        "title": meal.title,
        "description": meal.description,
        "category": meal.category,
        "ingredients": " ".join(meal.ingredients),
    }
    score = 0
    for name, text in fields.items():
        words = _WORD.findall(text.lower())
        score += TEXT_WEIGHTS[name] * sum(1 for word in words if word in terms)
    return score


class InMemoryMealRepository(IMealRepository):
    """
    In-memory implementation of IMealRepository port.

    Thread safety: NOT thread-safe. Methods never await, so every call is
    atomic with respect to other coroutines on the same event loop.
    Persistence: Data lost on process restart (in-memory only)

    Example:
        >>> repository = InMemoryMealRepository()
        >>> await repository.insert(meal)
        >>> retrieved = await repository.find_by_id(meal.id)
    """

    def __init__(self) -> None:
        self._storage: Dict[str, Meal] = {}

    def _matches(self, meal: Meal, query: CatalogQuery) -> bool:
        if query.category and meal.category != query.category:
            return False
        if query.price_range and not query.price_range.contains(meal.price):
            return False
        if query.has_reviews and meal.reviews_count <= 0:
            return False
        return True

    async def insert(self, meal: Meal) -> None:
        if meal.id in self._storage:
            raise StoreError(f"Duplicate meal id {meal.id}")
        self._storage[meal.id] = deepcopy(meal)

    async def find_by_id(self, meal_id: str) -> Optional[Meal]:
        meal = self._storage.get(meal_id)
        return deepcopy(meal) if meal else None

    async def search(self, query: CatalogQuery) -> Page[Meal]:
        candidates = [meal for meal in self._storage.values() if self._matches(meal, query)]

        if query.search:
            scored = [(relevance(meal, query.search), meal) for meal in candidates]
            scored = [(score, meal) for score, meal in scored if score > 0]
            scored.sort(key=lambda pair: (-pair[0], pair[1].id))
            ordered = [meal for _, meal in scored]
        else:
            attribute = query.sort_attribute
            ordered = sorted(candidates, key=lambda m: m.id)
            ordered.sort(
                key=lambda m: getattr(m, attribute),
                reverse=query.order == SortOrder.DESC,
            )

        window = ordered[query.skip:query.skip + query.page_size]
        return Page(
            items=[deepcopy(meal) for meal in window],
            total=len(ordered),
            page=query.page,
            page_size=query.page_size,
        )

    async def update_fields(self, meal_id: str, changes: Dict[str, Any]) -> Optional[Meal]:
        meal = self._storage.get(meal_id)
        if meal is None:
            return None
        for key, value in changes.items():
            setattr(meal, key, value)
        return deepcopy(meal)

    async def delete(self, meal_id: str) -> bool:
        return self._storage.pop(meal_id, None) is not None

    async def increment_likes(self, meal_id: str, delta: int) -> Optional[int]:
        meal = self._storage.get(meal_id)
        if meal is None:
            return None
        meal.likes = max(meal.likes + delta, 0)
        return meal.likes

    async def increment_reviews_count(self, meal_id: str, delta: int) -> Optional[int]:
        meal = self._storage.get(meal_id)
        if meal is None:
            return None
        meal.reviews_count = max(meal.reviews_count + delta, 0)
        return meal.reviews_count

    async def record_rating(self, meal_id: str, email: str, value: int) -> Optional[RatingChange]:
        meal = self._storage.get(meal_id)
        if meal is None:
            return None

        email = normalize_email(email)
        previous = meal.user_ratings.get(email)
        if previous is None:
            meal.ratings[value] += 1
            meal.reviews_count += 1
        elif previous != value:
            meal.ratings[previous] = max(meal.ratings[previous] - 1, 0)
            meal.ratings[value] += 1
        meal.user_ratings[email] = value
        meal.rating = meal.average_rating
        return RatingChange(previous=previous, current=value)

    async def count_by_distributor(self, email: str) -> int:
        email = normalize_email(email)
        return sum(1 for meal in self._storage.values() if meal.distributor_email == email)

    async def find_by_distributor(self, email: str) -> List[Meal]:
        email = normalize_email(email)
        meals = [meal for meal in self._storage.values() if meal.distributor_email == email]
        meals.sort(key=lambda m: m.post_time, reverse=True)
        return [deepcopy(meal) for meal in meals]

    async def distinct_categories(self) -> List[str]:
        return sorted({meal.category for meal in self._storage.values() if meal.category})

    def clear(self) -> None:
        """
        Clear all meals from storage.

        Note: Utility method for testing - not part of IMealRepository port
        """
        self._storage.clear()
