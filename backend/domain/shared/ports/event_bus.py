"""Event bus port.

Commands publish domain events after their write succeeded; application
handlers (logging, notifications) subscribe to them. Implementations live in
infrastructure.events.
"""

from typing import Awaitable, Callable, Protocol, Type, TypeVar

from domain.shared.events import DomainEvent

TEvent = TypeVar("TEvent", bound=DomainEvent)

EventHandler = Callable[[TEvent], Awaitable[None]]


class IEventBus(Protocol):
    """
    Publish/subscribe contract used by command handlers.

    Example:
        >>> async def on_payment(event: PaymentRecorded) -> None:
        ...     logger.info("badge granted", extra={"email": event.email})
        >>> event_bus.subscribe(PaymentRecorded, on_payment)
        >>> await event_bus.publish(PaymentRecorded(...))
    """

    def subscribe(self, event_type: Type[TEvent], handler: EventHandler[TEvent]) -> None:
        """Register handler for every future event of event_type."""
        ...

    async def publish(self, event: DomainEvent) -> None:
        """
        Deliver event to its subscribers in subscription order.

        Handler failures are contained: the caller's write already happened
        and must not be reported as failed.
        """
        ...

    def clear(self) -> None:
        ...
