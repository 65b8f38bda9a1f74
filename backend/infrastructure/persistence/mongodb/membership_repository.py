"""MongoDB implementation of membership package repository (read-only)."""

from typing import Any, Dict, List, Optional

from domain.membership.core.entities.membership_package import MembershipPackage
from domain.membership.core.ports.membership_repository import IMembershipRepository
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoMembershipRepository(MongoBaseRepository[MembershipPackage], IMembershipRepository):
    """Packages are reference data maintained outside the API."""

    collection_name = "memberships"

    def to_document(self, entity: MembershipPackage) -> Dict[str, Any]:
        return {
            "_id": entity.id,
            "name": entity.name,
            "level": entity.level,
            "price": entity.price,
            "perks": list(entity.perks),
        }

    def from_document(self, doc: Dict[str, Any]) -> MembershipPackage:
        return MembershipPackage(
            id=str(doc["_id"]),
            name=doc["name"],
            level=int(doc.get("level", 0)),
            price=float(doc.get("price", 0)),
            perks=list(doc.get("perks") or []),
        )

    async def list_packages(self) -> List[MembershipPackage]:
        documents = await self._find_many({}, sort=[("level", 1)])
        return [self.from_document(doc) for doc in documents]

    async def find_by_id(self, package_id: str) -> Optional[MembershipPackage]:
        document = await self._find_one({"_id": package_id})
        return self.from_document(document) if document else None
