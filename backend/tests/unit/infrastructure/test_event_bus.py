"""Unit tests for InMemoryEventBus.

Tests focus on:
- Handler subscription
- Event publishing to handlers in subscription order
- Error handling (failed handlers don't block others or the publisher)
"""

from typing import List

import pytest

from domain.shared.events import MealPromoted, PaymentRecorded, UserRegistered
from infrastructure.events.in_memory_bus import InMemoryEventBus
from infrastructure.events.subscriptions import register_handlers


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def promoted() -> MealPromoted:
    return MealPromoted(
        upcoming_id="up-1", meal_id="meal-1", title="Ramen", likes=10, automatic=True
    )


class TestSubscribe:
    def test_init(self) -> None:
        assert InMemoryEventBus()._handlers == {}

    def test_subscribe_counts_handlers_per_event_type(self, event_bus: InMemoryEventBus) -> None:
        async def handler(event: MealPromoted) -> None:
            pass

        event_bus.subscribe(MealPromoted, handler)
        event_bus.subscribe(MealPromoted, handler)

        assert event_bus.get_handler_count(MealPromoted) == 2
        assert event_bus.get_handler_count(UserRegistered) == 0

    def test_clear(self, event_bus: InMemoryEventBus) -> None:
        async def handler(event: UserRegistered) -> None:
            pass

        event_bus.subscribe(UserRegistered, handler)
        event_bus.clear()

        assert event_bus.get_handler_count(UserRegistered) == 0

    def test_register_handlers_wires_every_event(self, event_bus: InMemoryEventBus) -> None:
        register_handlers(event_bus)

        for event_type in (UserRegistered, MealPromoted, PaymentRecorded):
            assert event_bus.get_handler_count(event_type) == 1


class TestPublish:
    @pytest.mark.asyncio
    async def test_handlers_run_in_subscription_order(
        self, event_bus: InMemoryEventBus, promoted: MealPromoted
    ) -> None:
        calls: List[str] = []

        async def first(event: MealPromoted) -> None:
            calls.append("first")

        async def second(event: MealPromoted) -> None:
            calls.append("second")

        event_bus.subscribe(MealPromoted, first)
        event_bus.subscribe(MealPromoted, second)

        await event_bus.publish(promoted)

        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_only_matching_event_type_is_dispatched(
        self, event_bus: InMemoryEventBus, promoted: MealPromoted
    ) -> None:
        received: List[UserRegistered] = []

        async def handler(event: UserRegistered) -> None:
            received.append(event)

        event_bus.subscribe(UserRegistered, handler)

        await event_bus.publish(promoted)
        await event_bus.publish(UserRegistered(email="jane@example.com"))

        assert [event.email for event in received] == ["jane@example.com"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_block_others(
        self, event_bus: InMemoryEventBus, promoted: MealPromoted
    ) -> None:
        calls: List[str] = []

        async def broken(event: MealPromoted) -> None:
            raise RuntimeError("boom")

        async def healthy(event: MealPromoted) -> None:
            calls.append(event.meal_id)

        event_bus.subscribe(MealPromoted, broken)
        event_bus.subscribe(MealPromoted, healthy)

        await event_bus.publish(promoted)

        assert calls == ["meal-1"]

    @pytest.mark.asyncio
    async def test_publish_without_handlers(
        self, event_bus: InMemoryEventBus, promoted: MealPromoted
    ) -> None:
        await event_bus.publish(promoted)


class TestEvents:
    def test_occurred_at_must_be_timezone_aware(self) -> None:
        from datetime import datetime

        with pytest.raises(ValueError, match="timezone-aware"):
            UserRegistered(email="jane@example.com", occurred_at=datetime(2026, 1, 1))
