"""CQRS Commands for memberships and payments."""

from .create_payment_intent import (
    CreatePaymentIntentCommand,
    CreatePaymentIntentCommandHandler,
    to_cents,
)
from .record_payment import RecordPaymentCommand, RecordPaymentCommandHandler

__all__ = [
    "CreatePaymentIntentCommand",
    "CreatePaymentIntentCommandHandler",
    "RecordPaymentCommand",
    "RecordPaymentCommandHandler",
    "to_cents",
]
