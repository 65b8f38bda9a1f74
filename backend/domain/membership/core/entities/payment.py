"""Payment entity (append-only ledger entry)."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from domain.membership.core.exceptions.membership_errors import InvalidPaymentError
from domain.shared.identity import normalize_email


@dataclass(frozen=True)
class Payment:
    id: str
    email: str
    amount: float
    transaction_id: str
    membership_id: str
    payment_method: str
    paid_at: datetime

    @staticmethod
    def create(
        email: str,
        amount: float,
        transaction_id: str,
        membership_id: str,
        payment_method: str = "card",
        paid_at: Optional[datetime] = None,
    ) -> "Payment":
        if amount is None or amount <= 0:
            raise InvalidPaymentError("Payment amount must be positive")
        if not transaction_id or not transaction_id.strip():
            raise InvalidPaymentError("Transaction id required")
        return Payment(
            id=str(uuid4()),
            email=normalize_email(email),
            amount=float(amount),
            transaction_id=transaction_id.strip(),
            membership_id=membership_id,
            payment_method=payment_method,
            paid_at=paid_at or datetime.now(timezone.utc),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "email": self.email,
            "amount": self.amount,
            "transactionId": self.transaction_id,
            "membershipId": self.membership_id,
            "paymentMethod": self.payment_method,
            "paid_at": self.paid_at.isoformat(),
        }
