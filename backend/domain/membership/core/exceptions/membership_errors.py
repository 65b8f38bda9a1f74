"""Membership domain exceptions."""

from domain.shared.errors import GatewayError, NotFoundError, ValidationError


class PackageNotFoundError(NotFoundError):
    def __init__(self, package_id: str):
        super().__init__("Membership package", package_id)


class InvalidPaymentError(ValidationError):
    """Payment input is malformed (amount, transaction id)."""

    pass


class PaymentGatewayError(GatewayError):
    """Payment provider rejected the request or could not be reached."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(f"Payment gateway error (HTTP {status_code}): {message}")
