"""In-memory event bus implementation.

Handlers are kept in a per-process registry and awaited in subscription
order right after the state change that raised the event.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Type, TypeVar

from domain.shared.events import DomainEvent

logger = logging.getLogger(__name__)

TEvent = TypeVar("TEvent", bound=DomainEvent)

Handler = Callable[[Any], Awaitable[None]]


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class InMemoryEventBus:
    """
    In-memory implementation of IEventBus port.

    Error handling: a failing handler is logged with its traceback and the
    remaining handlers still run. The publisher never sees handler errors,
    because the state change the event describes is already committed.

    Example:
        >>> bus = InMemoryEventBus()
        >>> bus.subscribe(MealPromoted, MealPromotedHandler().handle)
        >>> await bus.publish(MealPromoted(...))
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[Handler]] = {}

    def subscribe(
        self,
        event_type: Type[TEvent],
        handler: Callable[[TEvent], Awaitable[None]],
    ) -> None:
        """
        Subscribe a handler to an event type.

        Note:
            Handlers are called in subscription order; subscribing twice
            means being called twice.
        """
        self._handlers.setdefault(event_type, []).append(handler)

        logger.debug(
            "Handler subscribed",
            extra={"event_type": event_type.__name__, "handler": _handler_name(handler)},
        )

    async def publish(self, event: DomainEvent) -> None:
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug("No handlers for event", extra={"event_type": event_type.__name__})
            return

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    "Event handler failed",
                    extra={
                        "event_type": event_type.__name__,
                        "event_id": str(event.event_id),
                        "handler": _handler_name(handler),
                        "error": str(e),
                    },
                    exc_info=True,
                )

    def clear(self) -> None:
        """Remove all subscriptions (test utility)."""
        self._handlers.clear()

    def get_handler_count(self, event_type: Type[DomainEvent]) -> int:
        return len(self._handlers.get(event_type, []))
