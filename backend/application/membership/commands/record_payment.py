"""Record payment command and handler."""

from dataclasses import dataclass
import logging
from typing import Optional

from domain.membership.core.entities.payment import Payment
from domain.membership.core.exceptions.membership_errors import PackageNotFoundError
from domain.membership.core.ports.membership_repository import IMembershipRepository
from domain.membership.core.ports.payment_repository import IPaymentRepository
from domain.shared.events import PaymentRecorded
from domain.shared.identity import ensure_same_identity
from domain.shared.ports.event_bus import IEventBus
from domain.user.core.exceptions.user_errors import UserNotFoundError
from domain.user.core.ports.user_repository import IUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordPaymentCommand:
    """
    Command: Append a completed payment to the ledger.

    Attributes:
        verified_email: Email from the verified token
        amount: Amount paid in currency units
        transaction_id: Provider transaction identifier
        membership_id: Purchased package
        payment_method: Provider payment method label
        email: Email asserted by the client (optional)
    """

    verified_email: Optional[str]
    amount: float
    transaction_id: str
    membership_id: str
    payment_method: str = "card"
    email: Optional[str] = None


class RecordPaymentCommandHandler:
    """Handler for RecordPaymentCommand."""

    def __init__(
        self,
        payment_repository: IPaymentRepository,
        membership_repository: IMembershipRepository,
        user_repository: IUserRepository,
        event_bus: IEventBus,
    ):
        self._payments = payment_repository
        self._packages = membership_repository
        self._users = user_repository
        self._event_bus = event_bus

    async def handle(self, command: RecordPaymentCommand) -> Payment:
        """
        Execute payment recording.

        Flow:
        1. Verify identity and payment fields
        2. Resolve the purchased package
        3. Append the payment (paid_at = now)
        4. Set the buyer's badge to the package name
        5. Publish PaymentRecorded

        Raises:
            InvalidPaymentError: On non-positive amount or missing transaction id
            PackageNotFoundError: If membership package doesn't exist
            UserNotFoundError: If the buyer has no user record
        """
        email = ensure_same_identity(command.verified_email, command.email)
        payment = Payment.create(
            email=email,
            amount=command.amount,
            transaction_id=command.transaction_id,
            membership_id=command.membership_id,
            payment_method=command.payment_method,
        )

        package = await self._packages.find_by_id(command.membership_id)
        if package is None:
            raise PackageNotFoundError(command.membership_id)

        if await self._users.find_by_email(email) is None:
            raise UserNotFoundError(email)

        await self._payments.insert(payment)
        await self._users.set_badge(email, package.name)

        logger.info(
            "payment.recorded",
            extra={
                "payment_id": payment.id,
                "membership_id": package.id,
                "badge": package.name,
            },
        )

        await self._event_bus.publish(
            PaymentRecorded(
                payment_id=payment.id,
                email=email,
                membership_id=package.id,
                amount=payment.amount,
                badge=package.name,
            )
        )
        return payment
