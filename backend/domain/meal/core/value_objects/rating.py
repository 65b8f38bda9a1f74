"""Rating value object."""

from dataclasses import dataclass
from typing import Optional

from domain.meal.core.exceptions.meal_errors import InvalidRatingError


@dataclass(frozen=True)
class Rating:
    """Integer rating between 1 and 5 inclusive.

    Examples:
        >>> Rating(4).value
        4
        >>> Rating.parse("5").value
        5

    Raises:
        InvalidRatingError: If value is outside 1..5 or not an integer
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidRatingError(self.value)
        if not 1 <= self.value <= 5:
            raise InvalidRatingError(self.value)

    @classmethod
    def parse(cls, raw: object) -> "Rating":
        """Build a rating from loosely typed input (JSON number or string)."""
        if isinstance(raw, float) and raw.is_integer():
            return cls(int(raw))
        if isinstance(raw, str):
            try:
                return cls(int(raw.strip()))
            except ValueError:
                raise InvalidRatingError(raw) from None
        return cls(raw)  # type: ignore[arg-type]


@dataclass(frozen=True)
class RatingChange:
    """Result of recording a rating.

    previous is None when this was the user's first rating of the meal.
    """

    previous: Optional[int]
    current: int

    @property
    def is_first(self) -> bool:
        return self.previous is None
