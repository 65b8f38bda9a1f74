"""User domain exceptions."""

from domain.shared.errors import AuthorizationError, NotFoundError


class UserNotFoundError(NotFoundError):
    """User was not found in the repository."""

    def __init__(self, email: str):
        """Initialize with user email.

        Args:
            email: Email that was not found
        """
        super().__init__("User", email)
        self.email = email


class AdminRequiredError(AuthorizationError):
    """Operation is reserved to admin users."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("Admin access required")


class MembershipRequiredError(AuthorizationError):
    """Operation requires a paid membership badge."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("An active membership is required")
