"""Offset pagination shared by list operations."""

from dataclasses import dataclass
from typing import Generic, List, TypeVar

PAGE_SIZE = 10

T = TypeVar("T")


def page_offset(page: int, page_size: int = PAGE_SIZE) -> int:
    """Offset for a 1-based page number; pages below 1 count as page 1."""
    return (max(page, 1) - 1) * page_size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total number of matches."""

    items: List[T]
    total: int
    page: int
    page_size: int = PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return (self.total + self.page_size - 1) // self.page_size

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],  # type: ignore[attr-defined]
            "total": self.total,
            "page": self.page,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
        }
