"""Payment ledger queries."""

from dataclasses import dataclass
from typing import List

from domain.membership.core.entities.payment import Payment
from domain.membership.core.ports.payment_repository import IPaymentRepository
from domain.shared.identity import normalize_email
from domain.shared.pagination import Page


@dataclass
class ListPaymentsQuery:
    repository: IPaymentRepository

    async def for_user(self, email: str) -> List[Payment]:
        return await self.repository.list_by_email(normalize_email(email))

    async def all(self, page: int = 1) -> Page[Payment]:
        return await self.repository.list_all(max(page, 1))
