"""MongoDB implementation of review repository."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from domain.meal.core.entities.review import Review
from domain.meal.core.ports.review_repository import IReviewRepository
from domain.shared.errors import StoreError
from domain.shared.identity import normalize_email
from domain.shared.pagination import PAGE_SIZE, Page, page_offset
from infrastructure.persistence.mongodb.base import MongoBaseRepository

_NEWEST_FIRST = [("createdAt", -1), ("_id", 1)]


class MongoReviewRepository(MongoBaseRepository[Review], IReviewRepository):
    """Reviews collection, indexed on mealId and email."""

    collection_name = "reviews"

    def to_document(self, entity: Review) -> Dict[str, Any]:
        return {
            "_id": entity.id,
            "mealId": entity.meal_id,
            "mealTitle": entity.meal_title,
            "email": entity.email,
            "username": entity.username,
            "photoURL": entity.photo_url,
            "text": entity.text,
            "createdAt": entity.created_at,
            "updatedAt": entity.updated_at,
        }

    def from_document(self, doc: Dict[str, Any]) -> Review:
        return Review(
            id=str(doc["_id"]),
            meal_id=doc["mealId"],
            meal_title=doc.get("mealTitle") or "",
            email=doc["email"],
            text=doc["text"],
            created_at=self.as_utc(doc["createdAt"]),
            updated_at=self.as_utc(doc.get("updatedAt") or doc["createdAt"]),
            username=doc.get("username"),
            photo_url=doc.get("photoURL"),
        )

    async def insert(self, review: Review) -> None:
        if not await self._insert_one(self.to_document(review)):
            raise StoreError(f"Duplicate review id {review.id}")

    async def find_by_id(self, review_id: str) -> Optional[Review]:
        document = await self._find_one({"_id": review_id})
        return self.from_document(document) if document else None

    async def list_for_meal(self, meal_id: str) -> List[Review]:
        documents = await self._find_many({"mealId": meal_id}, sort=_NEWEST_FIRST)
        return [self.from_document(doc) for doc in documents]

    async def count_for_meal(self, meal_id: str) -> int:
        return await self._count({"mealId": meal_id})

    async def list_by_email(self, email: str) -> List[Review]:
        documents = await self._find_many({"email": normalize_email(email)}, sort=_NEWEST_FIRST)
        return [self.from_document(doc) for doc in documents]

    async def list_all(self, page: int) -> Page[Review]:
        total = await self._count({})
        documents = await self._find_many(
            {}, sort=_NEWEST_FIRST, skip=page_offset(page), limit=PAGE_SIZE
        )
        return Page(items=[self.from_document(doc) for doc in documents], total=total, page=page)

    async def update_text(self, review_id: str, text: str, updated_at: datetime) -> Optional[Review]:
        document = await self._find_one_and_update(
            {"_id": review_id}, {"$set": {"text": text, "updatedAt": updated_at}}
        )
        return self.from_document(document) if document else None

    async def delete(self, review_id: str) -> bool:
        return await self._delete_one({"_id": review_id}) > 0
