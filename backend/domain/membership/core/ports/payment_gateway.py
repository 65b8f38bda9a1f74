"""Payment gateway port (interface)."""

from abc import ABC, abstractmethod


class IPaymentGateway(ABC):
    """Payment provider collaborator."""

    @abstractmethod
    async def create_payment_intent(self, amount_in_cents: int) -> str:
        """Create a charge intent and return its client secret.

        Args:
            amount_in_cents: Positive integer amount in the smallest currency unit

        Returns:
            Client secret the frontend uses to confirm the charge

        Raises:
            PaymentGatewayError: Provider rejected the request or is unreachable
        """
        pass
