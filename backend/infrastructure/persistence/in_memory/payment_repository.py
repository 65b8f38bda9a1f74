"""In-memory payment ledger."""

from typing import List

from domain.membership.core.entities.payment import Payment
from domain.membership.core.ports.payment_repository import IPaymentRepository
from domain.shared.identity import normalize_email
from domain.shared.pagination import PAGE_SIZE, Page, page_offset


class InMemoryPaymentRepository(IPaymentRepository):
    """Append-only list; Payment is frozen so entries are shared safely."""

    def __init__(self) -> None:
        self._ledger: List[Payment] = []

    def _newest_first(self, payments: List[Payment]) -> List[Payment]:
        return sorted(payments, key=lambda p: p.paid_at, reverse=True)

    async def insert(self, payment: Payment) -> None:
        self._ledger.append(payment)

    async def list_by_email(self, email: str) -> List[Payment]:
        email = normalize_email(email)
        return self._newest_first([p for p in self._ledger if p.email == email])

    async def list_all(self, page: int) -> Page[Payment]:
        ordered = self._newest_first(self._ledger)
        offset = page_offset(page)
        return Page(items=ordered[offset:offset + PAGE_SIZE], total=len(ordered), page=page)

    def clear(self) -> None:
        self._ledger.clear()
