"""Payment ledger repository port (interface)."""

from abc import ABC, abstractmethod
from typing import List

from domain.membership.core.entities.payment import Payment
from domain.shared.pagination import Page


class IPaymentRepository(ABC):
    """Append-only payment ledger."""

    @abstractmethod
    async def insert(self, payment: Payment) -> None:
        pass

    @abstractmethod
    async def list_by_email(self, email: str) -> List[Payment]:
        """Payments of a user, newest first."""
        pass

    @abstractmethod
    async def list_all(self, page: int) -> Page[Payment]:
        pass
