"""Wire domain event handlers onto the event bus."""

from application.meal.event_handlers.meal_promoted_handler import MealPromotedHandler
from application.membership.event_handlers.payment_recorded_handler import PaymentRecordedHandler
from application.user.handlers.user_registered_handler import UserRegisteredHandler
from domain.shared.events import MealPromoted, PaymentRecorded, UserRegistered
from domain.shared.ports.event_bus import IEventBus


def register_handlers(event_bus: IEventBus) -> None:
    event_bus.subscribe(UserRegistered, UserRegisteredHandler().handle)
    event_bus.subscribe(MealPromoted, MealPromotedHandler().handle)
    event_bus.subscribe(PaymentRecorded, PaymentRecordedHandler().handle)
