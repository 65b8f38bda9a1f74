"""In-memory meal request repository implementation."""

from copy import deepcopy
from datetime import datetime
from typing import Dict, List, Optional

from domain.meal_request.core.entities.meal_request import MealRequest, RequestStatus
from domain.meal_request.core.ports.meal_request_repository import IMealRequestRepository
from domain.shared.identity import normalize_email
from domain.shared.pagination import PAGE_SIZE, Page, page_offset


def _newest_first(requests: List[MealRequest]) -> List[MealRequest]:
    ordered = sorted(requests, key=lambda r: r.id)
    ordered.sort(key=lambda r: r.created_at, reverse=True)
    return [deepcopy(request) for request in ordered]


class InMemoryMealRequestRepository(IMealRequestRepository):
    def __init__(self) -> None:
        self._storage: Dict[str, MealRequest] = {}

    async def insert_if_no_pending(self, request: MealRequest) -> bool:
        for existing in self._storage.values():
            if (
                existing.meal_id == request.meal_id
                and existing.user_email == request.user_email
                and existing.is_pending
            ):
                return False
        self._storage[request.id] = deepcopy(request)
        return True

    async def find_by_id(self, request_id: str) -> Optional[MealRequest]:
        request = self._storage.get(request_id)
        return deepcopy(request) if request else None

    async def list_by_user(self, email: str) -> List[MealRequest]:
        email = normalize_email(email)
        return _newest_first([r for r in self._storage.values() if r.user_email == email])

    async def list_all(self, search: str, page: int) -> Page[MealRequest]:
        needle = (search or "").lower()
        matches = [
            r
            for r in self._storage.values()
            if not needle or needle in r.user_email or needle in (r.user_name or "").lower()
        ]
        ordered = _newest_first(matches)
        offset = page_offset(page)
        return Page(items=ordered[offset:offset + PAGE_SIZE], total=len(ordered), page=page)

    async def mark_delivered(self, request_id: str, served_at: datetime) -> Optional[MealRequest]:
        request = self._storage.get(request_id)
        if request is None or request.status != RequestStatus.PENDING:
            return None
        request.serve(served_at)
        return deepcopy(request)

    async def delete_owned(self, request_id: str, email: str) -> bool:
        request = self._storage.get(request_id)
        if request is None or request.user_email != normalize_email(email):
            return False
        del self._storage[request_id]
        return True

    def clear(self) -> None:
        self._storage.clear()
