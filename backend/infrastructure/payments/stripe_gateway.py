"""Stripe Payment Intents client - Implements IPaymentGateway port.

Key Features:
- Form-encoded POST to /v1/payment_intents
- Circuit breaker (5 network failures → 60s open)
- No retry: a failed charge intent is reported to the caller as-is
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp
from circuitbreaker import CircuitBreakerError, circuit

from domain.membership.core.exceptions.membership_errors import PaymentGatewayError
from domain.membership.core.ports.payment_gateway import IPaymentGateway
from infrastructure.config import get_payment_currency, get_stripe_secret_key

logger = logging.getLogger(__name__)


def _error_message(body: str) -> str:
    """Extract error.message from a Stripe error body."""
    try:
        return str(json.loads(body)["error"]["message"])
    except (ValueError, KeyError, TypeError):
        return body[:200] or "request failed"


class StripePaymentGateway(IPaymentGateway):
    """
    Stripe adapter for the payment gateway port.

    Example:
        >>> gateway = StripePaymentGateway()
        >>> secret = await gateway.create_payment_intent(1999)
        >>> secret.startswith("pi_")
        True
    """

    BASE_URL = "https://api.stripe.com/v1"

    def __init__(
        self,
        secret_key: Optional[str] = None,
        currency: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize Stripe gateway.

        Args:
            secret_key: Stripe secret key (defaults to STRIPE_SECRET_KEY)
            currency: ISO currency code (defaults to PAYMENT_CURRENCY)
            timeout: Total request timeout in seconds

        Raises:
            ValueError: If no secret key is configured
        """
        self.secret_key = secret_key or get_stripe_secret_key()
        if not self.secret_key:
            raise ValueError("STRIPE_SECRET_KEY is required")
        self.currency = currency or get_payment_currency()
        self.timeout = timeout

    async def create_payment_intent(self, amount_in_cents: int) -> str:
        """
        Create a payment intent and return its client secret.

        Raises:
            PaymentGatewayError: Provider rejected the request, is unreachable,
                or the circuit is open
        """
        try:
            data = await self._post_payment_intent(amount_in_cents)
        except CircuitBreakerError as e:
            logger.warning("stripe.circuit_open")
            raise PaymentGatewayError(503, "Payment provider temporarily unavailable") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("stripe.network_error", extra={"error": str(e)})
            raise PaymentGatewayError(0, f"Network error: {e}") from e

        client_secret = data.get("client_secret")
        if not client_secret:
            raise PaymentGatewayError(502, "Response missing client_secret")

        logger.info(
            "stripe.intent_created",
            extra={"intent_id": data.get("id"), "amount_in_cents": amount_in_cents},
        )
        return str(client_secret)

    @circuit(  # type: ignore[misc]
        failure_threshold=5,
        recovery_timeout=60,
        expected_exception=(aiohttp.ClientError, asyncio.TimeoutError),
        name="stripe_payment_intents",
    )
    async def _post_payment_intent(self, amount_in_cents: int) -> Dict[str, Any]:
        form = {
            "amount": str(amount_in_cents),
            "currency": self.currency,
            "payment_method_types[]": "card",
        }
        headers = {"Authorization": f"Bearer {self.secret_key}"}

        async with aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        ) as session:
            async with session.post(
                f"{self.BASE_URL}/payment_intents", data=form, headers=headers
            ) as response:
                if response.status >= 400:
                    message = _error_message(await response.text())
                    logger.error(
                        "stripe.request_rejected",
                        extra={"status": response.status, "provider_message": message},
                    )
                    raise PaymentGatewayError(response.status, message)

                result: Dict[str, Any] = await response.json()
                return result
