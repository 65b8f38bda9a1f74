"""Distributor meals queries."""

from dataclasses import dataclass
from typing import List

from domain.meal.core.entities.meal import Meal
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.shared.identity import normalize_email


@dataclass
class DistributorMealsQuery:
    """Meals submitted by one distributor."""

    repository: IMealRepository

    async def count(self, email: str) -> int:
        return await self.repository.count_by_distributor(normalize_email(email))

    async def list(self, email: str) -> List[Meal]:
        return await self.repository.find_by_distributor(normalize_email(email))
