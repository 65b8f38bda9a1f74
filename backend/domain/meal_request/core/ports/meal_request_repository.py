"""Meal request repository port (interface)."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from domain.meal_request.core.entities.meal_request import MealRequest
from domain.shared.pagination import Page


class IMealRequestRepository(ABC):
    """Repository interface for meal requests."""

    @abstractmethod
    async def insert_if_no_pending(self, request: MealRequest) -> bool:
        """Insert unless the user has a pending request for the same meal.

        Returns:
            True if inserted, False if a pending duplicate exists
        """
        pass

    @abstractmethod
    async def find_by_id(self, request_id: str) -> Optional[MealRequest]:
        pass

    @abstractmethod
    async def list_by_user(self, email: str) -> List[MealRequest]:
        """Requests of a user, newest first."""
        pass

    @abstractmethod
    async def list_all(self, search: str, page: int) -> Page[MealRequest]:
        """All requests, newest first; search matches user name or email."""
        pass

    @abstractmethod
    async def mark_delivered(self, request_id: str, served_at: datetime) -> Optional[MealRequest]:
        """Conditionally move a pending request to delivered.

        Returns:
            Updated request, or None if no pending request has that id
        """
        pass

    @abstractmethod
    async def delete_owned(self, request_id: str, email: str) -> bool:
        """Delete a request only if it belongs to email."""
        pass
