"""MongoDB implementation of meal request repository."""

from datetime import datetime
import re
from typing import Any, Dict, List, Optional

from domain.meal_request.core.entities.meal_request import MealRequest, RequestStatus
from domain.meal_request.core.ports.meal_request_repository import IMealRequestRepository
from domain.shared.identity import normalize_email
from domain.shared.pagination import PAGE_SIZE, Page, page_offset
from infrastructure.persistence.mongodb.base import MongoBaseRepository

_NEWEST_FIRST = [("createdAt", -1), ("_id", 1)]


class MongoMealRequestRepository(MongoBaseRepository[MealRequest], IMealRequestRepository):
    """
    Meal requests collection.

    A partial unique index on (mealId, userEmail) restricted to
    status == "pending" rejects a second pending request atomically;
    delivered requests do not block new ones.
    """

    collection_name = "mealRequests"

    def to_document(self, entity: MealRequest) -> Dict[str, Any]:
        return {
            "_id": entity.id,
            "mealId": entity.meal_id,
            "mealTitle": entity.meal_title,
            "userEmail": entity.user_email,
            "userName": entity.user_name,
            "photoURL": entity.photo_url,
            "status": entity.status.value,
            "createdAt": entity.created_at,
            "servedAt": entity.served_at,
        }

    def from_document(self, doc: Dict[str, Any]) -> MealRequest:
        return MealRequest(
            id=str(doc["_id"]),
            meal_id=doc["mealId"],
            meal_title=doc.get("mealTitle") or "",
            user_email=doc["userEmail"],
            created_at=self.as_utc(doc["createdAt"]),
            user_name=doc.get("userName"),
            photo_url=doc.get("photoURL"),
            status=RequestStatus(doc.get("status", RequestStatus.PENDING.value)),
            served_at=self.as_utc(doc.get("servedAt")),
        )

    async def insert_if_no_pending(self, request: MealRequest) -> bool:
        return await self._insert_one(self.to_document(request))

    async def find_by_id(self, request_id: str) -> Optional[MealRequest]:
        document = await self._find_one({"_id": request_id})
        return self.from_document(document) if document else None

    async def list_by_user(self, email: str) -> List[MealRequest]:
        documents = await self._find_many(
            {"userEmail": normalize_email(email)}, sort=_NEWEST_FIRST
        )
        return [self.from_document(doc) for doc in documents]

    async def list_all(self, search: str, page: int) -> Page[MealRequest]:
        filter_dict: Dict[str, Any] = {}
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            filter_dict["$or"] = [{"userName": pattern}, {"userEmail": pattern}]

        total = await self._count(filter_dict)
        documents = await self._find_many(
            filter_dict, sort=_NEWEST_FIRST, skip=page_offset(page), limit=PAGE_SIZE
        )
        return Page(items=[self.from_document(doc) for doc in documents], total=total, page=page)

    async def mark_delivered(self, request_id: str, served_at: datetime) -> Optional[MealRequest]:
        document = await self._find_one_and_update(
            {"_id": request_id, "status": RequestStatus.PENDING.value},
            {"$set": {"status": RequestStatus.DELIVERED.value, "servedAt": served_at}},
        )
        return self.from_document(document) if document else None

    async def delete_owned(self, request_id: str, email: str) -> bool:
        deleted = await self._delete_one({"_id": request_id, "userEmail": normalize_email(email)})
        return deleted > 0
