"""MongoDB User Repository implementation."""

import re
from typing import Any, Dict, List, Optional

from domain.shared.identity import normalize_email
from domain.user.core.entities.user import DEFAULT_BADGE, Role, User
from domain.user.core.ports.user_repository import IUserRepository
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoUserRepository(MongoBaseRepository[User], IUserRepository):
    """MongoDB implementation of User repository.

    Document schema:
    {
        "_id": "uuid-string",
        "email": "jane@example.com",     # unique index
        "name": "Jane",
        "photo": "https://...",
        "role": "user" | "admin",
        "mealsAdded": 0,
        "badge": "Bronze",
        "last_log_in": ISODate(...)
    }

    Examples:
        >>> repo = MongoUserRepository(db)
        >>> created = await repo.insert_if_absent(User.create("jane@example.com"))
        >>> user = await repo.find_by_email("jane@example.com")
    """

    collection_name = "users"

    def to_document(self, entity: User) -> Dict[str, Any]:
        return {
            "_id": entity.id,
            "email": entity.email,
            "name": entity.name,
            "photo": entity.photo,
            "role": entity.role.value,
            "mealsAdded": entity.meals_added,
            "badge": entity.badge,
            "last_log_in": entity.last_log_in,
        }

    def from_document(self, doc: Dict[str, Any]) -> User:
        return User(
            id=str(doc["_id"]),
            email=doc["email"],
            name=doc.get("name"),
            photo=doc.get("photo"),
            role=Role(doc.get("role", Role.USER.value)),
            meals_added=max(int(doc.get("mealsAdded", 0)), 0),
            badge=doc.get("badge") or DEFAULT_BADGE,
            last_log_in=self.as_utc(doc.get("last_log_in")),
        )

    async def insert_if_absent(self, user: User) -> bool:
        """Upsert with $setOnInsert so an existing record is never touched.

        The unique index on email turns a concurrent first sign-in into a
        no-op for the losing writer.
        """
        document = self.to_document(user)
        _, upserted_id = await self._update_one(
            {"email": user.email},
            {"$setOnInsert": document},
            upsert=True,
        )
        return upserted_id is not None

    async def find_by_email(self, email: str) -> Optional[User]:
        document = await self._find_one({"email": normalize_email(email)})
        if not document:
            return None
        return self.from_document(document)

    async def search(self, text: str = "", role: Optional[Role] = None) -> List[User]:
        query: Dict[str, Any] = {}
        if text:
            pattern = {"$regex": re.escape(text), "$options": "i"}
            query["$or"] = [{"name": pattern}, {"email": pattern}]
        if role is not None:
            query["role"] = role.value

        documents = await self._find_many(query, sort=[("email", 1)])
        return [self.from_document(doc) for doc in documents]

    async def set_role(self, email: str, role: Role) -> Optional[User]:
        document = await self._find_one_and_update(
            {"email": normalize_email(email)}, {"$set": {"role": role.value}}
        )
        return self.from_document(document) if document else None

    async def set_badge(self, email: str, badge: str) -> Optional[User]:
        document = await self._find_one_and_update(
            {"email": normalize_email(email)}, {"$set": {"badge": badge}}
        )
        return self.from_document(document) if document else None

    async def increment_meals_added(self, email: str, delta: int) -> None:
        # Pipeline update: add and clamp at 0 in one atomic write
        await self._update_one(
            {"email": normalize_email(email)},
            [
                {
                    "$set": {
                        "mealsAdded": {
                            "$max": [0, {"$add": [{"$ifNull": ["$mealsAdded", 0]}, delta]}]
                        }
                    }
                }
            ],
        )
