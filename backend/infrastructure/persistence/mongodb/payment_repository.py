"""MongoDB implementation of the payment ledger."""

from typing import Any, Dict, List

from domain.membership.core.entities.payment import Payment
from domain.membership.core.ports.payment_repository import IPaymentRepository
from domain.shared.errors import StoreError
from domain.shared.identity import normalize_email
from domain.shared.pagination import PAGE_SIZE, Page, page_offset
from infrastructure.persistence.mongodb.base import MongoBaseRepository

_NEWEST_FIRST = [("paid_at", -1), ("_id", 1)]


class MongoPaymentRepository(MongoBaseRepository[Payment], IPaymentRepository):
    """Append-only: no update or delete operations are exposed."""

    collection_name = "payments"

    def to_document(self, entity: Payment) -> Dict[str, Any]:
        return {
            "_id": entity.id,
            "email": entity.email,
            "amount": entity.amount,
            "transactionId": entity.transaction_id,
            "membershipId": entity.membership_id,
            "paymentMethod": entity.payment_method,
            "paid_at": entity.paid_at,
        }

    def from_document(self, doc: Dict[str, Any]) -> Payment:
        return Payment(
            id=str(doc["_id"]),
            email=doc["email"],
            amount=float(doc["amount"]),
            transaction_id=doc["transactionId"],
            membership_id=doc["membershipId"],
            payment_method=doc.get("paymentMethod") or "card",
            paid_at=self.as_utc(doc["paid_at"]),
        )

    async def insert(self, payment: Payment) -> None:
        if not await self._insert_one(self.to_document(payment)):
            raise StoreError(f"Duplicate payment id {payment.id}")

    async def list_by_email(self, email: str) -> List[Payment]:
        documents = await self._find_many({"email": normalize_email(email)}, sort=_NEWEST_FIRST)
        return [self.from_document(doc) for doc in documents]

    async def list_all(self, page: int) -> Page[Payment]:
        total = await self._count({})
        documents = await self._find_many(
            {}, sort=_NEWEST_FIRST, skip=page_offset(page), limit=PAGE_SIZE
        )
        return Page(items=[self.from_document(doc) for doc in documents], total=total, page=page)
