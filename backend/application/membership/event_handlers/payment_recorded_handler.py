"""Handler for PaymentRecorded domain event."""

import logging

from domain.shared.events import PaymentRecorded

logger = logging.getLogger(__name__)


class PaymentRecordedHandler:
    """Log membership purchases. Side effects only."""

    async def handle(self, event: PaymentRecorded) -> None:
        logger.info(
            "membership.purchased",
            extra={
                "payment_id": event.payment_id,
                "membership_id": event.membership_id,
                "badge": event.badge,
                "amount": event.amount,
                "paid_at": event.occurred_at.isoformat(),
            },
        )
