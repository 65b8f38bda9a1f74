"""MongoDB implementation of upcoming meal repository."""

from typing import Any, Dict, List, Optional

from domain.meal.core.entities.upcoming_meal import UpcomingMeal
from domain.meal.core.ports.upcoming_meal_repository import IUpcomingMealRepository
from domain.shared.errors import StoreError
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoUpcomingMealRepository(MongoBaseRepository[UpcomingMeal], IUpcomingMealRepository):
    """
    MongoDB implementation of upcoming meal repository.

    Same fields as a catalog meal minus the rating bookkeeping, plus
    createdAt. Promotion removes the document with find_one_and_delete.
    """

    collection_name = "upcomingMeals"

    def to_document(self, entity: UpcomingMeal) -> Dict[str, Any]:
        return {
            "_id": entity.id,
            "title": entity.title,
            "category": entity.category,
            "price": entity.price,
            "description": entity.description,
            "ingredients": list(entity.ingredients),
            "image": entity.image,
            "distributorEmail": entity.distributor_email,
            "distributorName": entity.distributor_name,
            "likes": entity.likes,
            "createdAt": entity.created_at,
        }

    def from_document(self, doc: Dict[str, Any]) -> UpcomingMeal:
        return UpcomingMeal(
            id=str(doc["_id"]),
            title=doc["title"],
            category=doc["category"],
            price=float(doc["price"]),
            distributor_email=doc["distributorEmail"],
            created_at=self.as_utc(doc["createdAt"]),
            description=doc.get("description") or "",
            ingredients=list(doc.get("ingredients") or []),
            image=doc.get("image"),
            distributor_name=doc.get("distributorName"),
            likes=int(doc.get("likes", 0)),
        )

    async def insert(self, meal: UpcomingMeal) -> None:
        if not await self._insert_one(self.to_document(meal)):
            raise StoreError(f"Duplicate upcoming meal id {meal.id}")

    async def find_by_id(self, upcoming_id: str) -> Optional[UpcomingMeal]:
        document = await self._find_one({"_id": upcoming_id})
        return self.from_document(document) if document else None

    async def list_all(self) -> List[UpcomingMeal]:
        documents = await self._find_many({}, sort=[("likes", -1), ("createdAt", 1)])
        return [self.from_document(doc) for doc in documents]

    async def increment_likes(self, upcoming_id: str, delta: int) -> Optional[int]:
        return await self._increment_counter(upcoming_id, "likes", delta)

    async def take(self, upcoming_id: str) -> Optional[UpcomingMeal]:
        document = await self._find_one_and_delete({"_id": upcoming_id})
        return self.from_document(document) if document else None
