"""MongoDB implementation of the likes join collection."""

from typing import Any, Dict, List

from domain.meal.core.entities.like import Like, LikeTarget
from domain.meal.core.ports.like_repository import ILikeRepository
from domain.shared.identity import normalize_email
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoLikeRepository(MongoBaseRepository[Like], ILikeRepository):
    """
    Likes collection.

    Document Schema:
    {
        "_id": "uuid-string",
        "target": "meal" | "upcoming_meal",
        "entityId": "uuid-string",
        "email": "jane@example.com",
        "likedAt": ISODate(...)
    }

    Unique index on (target, entityId, email) makes add() idempotent under
    concurrent toggles by the same user.
    """

    collection_name = "likes"

    def to_document(self, entity: Like) -> Dict[str, Any]:
        return {
            "_id": entity.id,
            "target": entity.target.value,
            "entityId": entity.entity_id,
            "email": entity.email,
            "likedAt": entity.liked_at,
        }

    def from_document(self, doc: Dict[str, Any]) -> Like:
        return Like(
            id=str(doc["_id"]),
            target=LikeTarget(doc["target"]),
            entity_id=doc["entityId"],
            email=doc["email"],
            liked_at=self.as_utc(doc["likedAt"]),
        )

    @staticmethod
    def _key(target: LikeTarget, entity_id: str, email: str) -> Dict[str, Any]:
        return {"target": target.value, "entityId": entity_id, "email": normalize_email(email)}

    async def add(self, like: Like) -> bool:
        return await self._insert_one(self.to_document(like))

    async def remove(self, target: LikeTarget, entity_id: str, email: str) -> bool:
        return await self._delete_one(self._key(target, entity_id, email)) > 0

    async def exists(self, target: LikeTarget, entity_id: str, email: str) -> bool:
        return await self._find_one(self._key(target, entity_id, email), {"_id": 1}) is not None

    async def liked_by(self, target: LikeTarget, entity_id: str) -> List[str]:
        documents = await self._find_many(
            {"target": target.value, "entityId": entity_id},
            sort=[("likedAt", 1)],
            projection={"email": 1},
        )
        return [doc["email"] for doc in documents]

    async def transfer(
        self,
        source: LikeTarget,
        source_id: str,
        destination: LikeTarget,
        destination_id: str,
    ) -> int:
        return await self._update_many(
            {"target": source.value, "entityId": source_id},
            {"$set": {"target": destination.value, "entityId": destination_id}},
        )

    async def delete_for(self, target: LikeTarget, entity_id: str) -> int:
        return await self._delete_many({"target": target.value, "entityId": entity_id})
