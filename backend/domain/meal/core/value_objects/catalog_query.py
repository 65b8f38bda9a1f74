"""Catalog query value objects: filters, sorting and pagination."""

from dataclasses import dataclass
from enum import Enum
import math
from typing import Optional

from domain.shared.errors import ValidationError
from domain.shared.pagination import PAGE_SIZE, page_offset


# Public sort keys -> entity attribute names
SORT_FIELDS = {
    "postTime": "post_time",
    "price": "price",
    "likes": "likes",
    "rating": "rating",
    "reviews_count": "reviews_count",
    "title": "title",
}
DEFAULT_SORT = "postTime"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SortOrder":
        if not raw:
            return cls.DESC
        try:
            return cls(raw.lower())
        except ValueError:
            raise ValidationError(f"Invalid sort order: {raw!r}") from None


@dataclass(frozen=True)
class PriceRange:
    """Inclusive price range parsed from "min-max".

    Examples:
        >>> PriceRange.parse("5-15")
        PriceRange(minimum=5.0, maximum=15.0)
        >>> PriceRange.parse("abc-15")
        Traceback (most recent call last):
        ...
        domain.shared.errors.ValidationError: Invalid price range: 'abc-15'
    """

    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        if self.minimum < 0 or self.maximum < self.minimum:
            raise ValidationError(f"Invalid price range: {self.minimum}-{self.maximum}")

    @classmethod
    def parse(cls, raw: str) -> "PriceRange":
        parts = raw.split("-")
        if len(parts) != 2:
            raise ValidationError(f"Invalid price range: {raw!r}")
        try:
            minimum, maximum = (float(part.strip()) for part in parts)
        except ValueError:
            raise ValidationError(f"Invalid price range: {raw!r}") from None
        if not (math.isfinite(minimum) and math.isfinite(maximum)):
            raise ValidationError(f"Invalid price range: {raw!r}")
        return cls(minimum, maximum)

    def contains(self, price: float) -> bool:
        return self.minimum <= price <= self.maximum


@dataclass(frozen=True)
class CatalogQuery:
    """Normalized catalog query.

    When search is set, results are ordered by relevance and sort_by/order
    are ignored.
    """

    page: int = 1
    search: Optional[str] = None
    category: Optional[str] = None
    price_range: Optional[PriceRange] = None
    sort_by: str = DEFAULT_SORT
    order: SortOrder = SortOrder.DESC
    has_reviews: bool = False
    page_size: int = PAGE_SIZE

    @classmethod
    def from_params(
        cls,
        page: Optional[int] = None,
        search: Optional[str] = None,
        category: Optional[str] = None,
        price_range: Optional[str] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
        has_reviews: bool = False,
    ) -> "CatalogQuery":
        """Build a query from raw request parameters.

        Raises:
            ValidationError: On malformed price range, sort field or order
        """
        sort_key = sort_by or DEFAULT_SORT
        if sort_key not in SORT_FIELDS:
            raise ValidationError(f"Invalid sort field: {sort_key!r}")

        return cls(
            page=max(page or 1, 1),
            search=(search or "").strip() or None,
            category=(category or "").strip() or None,
            price_range=PriceRange.parse(price_range) if price_range else None,
            sort_by=sort_key,
            order=SortOrder.parse(order),
            has_reviews=has_reviews,
        )

    @property
    def skip(self) -> int:
        return page_offset(self.page, self.page_size)

    @property
    def sort_attribute(self) -> str:
        return SORT_FIELDS[self.sort_by]
