"""In-memory review repository implementation."""

from copy import deepcopy
from datetime import datetime
from typing import Dict, List, Optional

from domain.meal.core.entities.review import Review
from domain.meal.core.ports.review_repository import IReviewRepository
from domain.shared.errors import StoreError
from domain.shared.identity import normalize_email
from domain.shared.pagination import PAGE_SIZE, Page, page_offset


def _newest_first(reviews: List[Review]) -> List[Review]:
    ordered = sorted(reviews, key=lambda r: r.id)
    ordered.sort(key=lambda r: r.created_at, reverse=True)
    return [deepcopy(review) for review in ordered]


class InMemoryReviewRepository(IReviewRepository):
    def __init__(self) -> None:
        self._storage: Dict[str, Review] = {}

    async def insert(self, review: Review) -> None:
        if review.id in self._storage:
            raise StoreError(f"Duplicate review id {review.id}")
        self._storage[review.id] = deepcopy(review)

    async def find_by_id(self, review_id: str) -> Optional[Review]:
        review = self._storage.get(review_id)
        return deepcopy(review) if review else None

    async def list_for_meal(self, meal_id: str) -> List[Review]:
        return _newest_first([r for r in self._storage.values() if r.meal_id == meal_id])

    async def count_for_meal(self, meal_id: str) -> int:
        return sum(1 for r in self._storage.values() if r.meal_id == meal_id)

    async def list_by_email(self, email: str) -> List[Review]:
        email = normalize_email(email)
        return _newest_first([r for r in self._storage.values() if r.email == email])

    async def list_all(self, page: int) -> Page[Review]:
        ordered = _newest_first(list(self._storage.values()))
        offset = page_offset(page)
        return Page(items=ordered[offset:offset + PAGE_SIZE], total=len(ordered), page=page)

    async def update_text(self, review_id: str, text: str, updated_at: datetime) -> Optional[Review]:
        review = self._storage.get(review_id)
        if review is None:
            return None
        review.text = text
        review.updated_at = updated_at
        return deepcopy(review)

    async def delete(self, review_id: str) -> bool:
        return self._storage.pop(review_id, None) is not None

    def clear(self) -> None:
        self._storage.clear()
