"""Domain exceptions for the Meal bounded context.

Every exception subclasses one of the shared error categories so the API
layer can map it to a status code without knowing the meal context.
"""

from domain.shared.errors import AuthorizationError, NotFoundError, ValidationError


class InvalidMealError(ValidationError):
    """Raised when meal invariants are violated.

    Examples:
    - Empty title
    - Negative price
    - Attempt to edit a non-editable field
    """

    pass


class InvalidRatingError(ValidationError):
    """Rating outside the 1..5 integer domain."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Rating must be an integer between 1 and 5, got {value!r}")


class MealNotFoundError(NotFoundError):
    """Catalog meal does not exist."""

    def __init__(self, meal_id: str):
        super().__init__("Meal", meal_id)


class UpcomingMealNotFoundError(NotFoundError):
    """Upcoming meal does not exist (or was already published)."""

    def __init__(self, upcoming_id: str):
        super().__init__("Upcoming meal", upcoming_id)


class MealOwnershipError(AuthorizationError):
    """Caller is neither the distributor of the meal nor an admin."""

    def __init__(self, meal_id: str):
        self.meal_id = meal_id
        super().__init__("Only the distributor or an admin can modify this meal")


class ReviewTextRequiredError(ValidationError):
    """Review text is missing or blank."""

    def __init__(self) -> None:
        super().__init__("Review text required")


class ReviewNotFoundError(NotFoundError):
    """Review does not exist."""

    def __init__(self, review_id: str):
        super().__init__("Review", review_id)


class ReviewOwnershipError(AuthorizationError):
    """Caller is not the author of the review."""

    def __init__(self, review_id: str):
        self.review_id = review_id
        super().__init__("You can only modify your own reviews")
