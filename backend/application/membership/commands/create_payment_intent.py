"""Create payment intent command and handler."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import logging
from typing import Any

from domain.membership.core.exceptions.membership_errors import InvalidPaymentError
from domain.membership.core.ports.payment_gateway import IPaymentGateway

logger = logging.getLogger(__name__)


def to_cents(amount: Any) -> int:
    """Convert an amount in currency units to integer cents (half up).

    Examples:
        >>> to_cents(19.99)
        1999
        >>> to_cents("5")
        500

    Raises:
        InvalidPaymentError: If amount is not a positive number
    """
    if isinstance(amount, bool):
        raise InvalidPaymentError("Payment amount must be a number")
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidPaymentError("Payment amount must be a number") from None
    if not value.is_finite() or value <= 0:
        raise InvalidPaymentError("Payment amount must be positive")

    cents = int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if cents < 1:
        raise InvalidPaymentError("Payment amount must be at least one cent")
    return cents


@dataclass(frozen=True)
class CreatePaymentIntentCommand:
    amount: Any


class CreatePaymentIntentCommandHandler:
    """Handler for CreatePaymentIntentCommand."""

    def __init__(self, gateway: IPaymentGateway):
        self._gateway = gateway

    async def handle(self, command: CreatePaymentIntentCommand) -> str:
        """
        Returns:
            Client secret of the created intent

        Raises:
            InvalidPaymentError: If amount is not positive
            PaymentGatewayError: If the provider fails
        """
        cents = to_cents(command.amount)
        client_secret = await self._gateway.create_payment_intent(cents)

        logger.info("payment.intent_created", extra={"amount_in_cents": cents})
        return client_secret
