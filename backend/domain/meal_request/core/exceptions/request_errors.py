"""Meal request domain exceptions."""

from domain.shared.errors import ConflictError, NotFoundError


class MealRequestNotFoundError(NotFoundError):
    """Request does not exist, or does not belong to the caller.

    The two cases are deliberately indistinguishable for deletion.
    """

    def __init__(self, request_id: str):
        super().__init__("Meal request", request_id)


class DuplicateMealRequestError(ConflictError):
    """User already has a pending request for this meal."""

    def __init__(self, meal_id: str, email: str):
        self.meal_id = meal_id
        self.email = email
        super().__init__("Already requested")


class RequestAlreadyServedError(ConflictError):
    """Request is no longer pending."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__("Meal request already delivered")
