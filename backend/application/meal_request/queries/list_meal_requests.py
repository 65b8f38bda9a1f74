"""Meal request listing queries."""

from dataclasses import dataclass
from typing import List

from domain.meal_request.core.entities.meal_request import MealRequest
from domain.meal_request.core.ports.meal_request_repository import IMealRequestRepository
from domain.shared.identity import normalize_email
from domain.shared.pagination import Page


@dataclass
class ListMealRequestsQuery:
    repository: IMealRequestRepository

    async def for_user(self, email: str) -> List[MealRequest]:
        return await self.repository.list_by_user(normalize_email(email))

    async def all(self, search: str = "", page: int = 1) -> Page[MealRequest]:
        """All requests (admin view); search matches user name or email."""
        return await self.repository.list_all((search or "").strip(), max(page, 1))
