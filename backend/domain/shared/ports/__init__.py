"""Domain ports shared across bounded contexts."""

from domain.shared.ports.event_bus import IEventBus

__all__ = [
    "IEventBus",
]
