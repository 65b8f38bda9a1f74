"""Unit tests for upcoming meal voting and promotion."""

import asyncio

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock

from application.upcoming_meal.commands import (
    PublishUpcomingMealCommand,
    PublishUpcomingMealCommandHandler,
    SubmitUpcomingMealCommand,
    SubmitUpcomingMealCommandHandler,
    ToggleUpcomingLikeCommand,
    ToggleUpcomingLikeCommandHandler,
)
from application.upcoming_meal.queries import ListUpcomingMealsQueryHandler
from domain.meal.core.entities.like import Like, LikeTarget
from domain.meal.core.exceptions.meal_errors import InvalidMealError, UpcomingMealNotFoundError
from domain.meal.core.services.like_toggler import LikeToggler
from domain.meal.core.value_objects.catalog_query import CatalogQuery
from domain.shared.errors import StoreError
from domain.shared.events import MealPromoted

THRESHOLD = 10


@pytest.fixture
def event_bus():
    return AsyncMock()


@pytest.fixture
def publisher(repositories, event_bus):
    return PublishUpcomingMealCommandHandler(
        repositories.upcoming_meals,
        repositories.meals,
        repositories.likes,
        repositories.users,
        event_bus,
    )


@pytest.fixture
def toggle(repositories, publisher):
    return ToggleUpcomingLikeCommandHandler(
        repositories.upcoming_meals, repositories.likes, publisher, threshold=THRESHOLD
    )


@pytest_asyncio.fixture
async def upcoming(repositories, admin):
    return await SubmitUpcomingMealCommandHandler(repositories.upcoming_meals).handle(
        SubmitUpcomingMealCommand(
            distributor_email=admin.email,
            title="Bibimbap",
            category="Lunch",
            price=11,
            ingredients=["rice", "egg"],
        )
    )


async def like_as(toggle, upcoming_id, n):
    email = f"voter{n}@example.com"
    return await toggle.handle(
        ToggleUpcomingLikeCommand(upcoming_id=upcoming_id, verified_email=email)
    )


class TestSubmitUpcomingMeal:
    @pytest.mark.asyncio
    async def test_submit_starts_with_zero_likes(self, upcoming):
        assert upcoming.likes == 0
        assert upcoming.distributor_email == "chef@bitelog.io"

    @pytest.mark.asyncio
    async def test_submit_validates_details(self, repositories):
        with pytest.raises(InvalidMealError):
            await SubmitUpcomingMealCommandHandler(repositories.upcoming_meals).handle(
                SubmitUpcomingMealCommand(
                    distributor_email="chef@bitelog.io", title="", category="Lunch", price=1
                )
            )

    @pytest.mark.asyncio
    async def test_list_sorted_by_likes(self, repositories, upcoming, toggle, admin):
        second = await SubmitUpcomingMealCommandHandler(repositories.upcoming_meals).handle(
            SubmitUpcomingMealCommand(
                distributor_email=admin.email, title="Pho", category="Dinner", price=10
            )
        )
        await like_as(toggle, second.id, 1)

        listed = await ListUpcomingMealsQueryHandler(repositories.upcoming_meals).handle()

        assert [item.title for item in listed] == ["Pho", "Bibimbap"]


class TestToggleUpcomingLike:
    @pytest.mark.asyncio
    async def test_below_threshold_stays_upcoming(self, repositories, toggle, upcoming):
        for n in range(THRESHOLD - 1):
            result = await like_as(toggle, upcoming.id, n)

        assert result.likes == THRESHOLD - 1
        assert result.promoted_meal_id is None
        assert await repositories.upcoming_meals.find_by_id(upcoming.id) is not None

    @pytest.mark.asyncio
    async def test_reaching_threshold_promotes(
        self, repositories, toggle, upcoming, admin, event_bus
    ):
        for n in range(THRESHOLD - 1):
            await like_as(toggle, upcoming.id, n)

        result = await like_as(toggle, upcoming.id, THRESHOLD)

        assert result.liked is True
        assert result.likes == THRESHOLD
        assert result.promoted_meal_id is not None
        assert result.to_dict()["promoted"] is True

        assert await repositories.upcoming_meals.find_by_id(upcoming.id) is None
        meal = await repositories.meals.find_by_id(result.promoted_meal_id)
        assert meal.title == "Bibimbap"
        assert meal.likes == THRESHOLD
        assert meal.reviews_count == 0
        likers = await repositories.likes.liked_by(LikeTarget.MEAL, meal.id)
        assert len(likers) == THRESHOLD
        assert await repositories.likes.liked_by(LikeTarget.UPCOMING_MEAL, upcoming.id) == []
        assert (await repositories.users.find_by_email(admin.email)).meals_added == 1

        event = event_bus.publish.await_args.args[0]
        assert isinstance(event, MealPromoted)
        assert event.automatic is True
        assert event.meal_id == meal.id

    @pytest.mark.asyncio
    async def test_unlike_never_promotes(self, repositories, upcoming, publisher):
        toggle = ToggleUpcomingLikeCommandHandler(
            repositories.upcoming_meals, repositories.likes, publisher, threshold=1
        )
        await repositories.upcoming_meals.increment_likes(upcoming.id, 5)
        await repositories.likes.add(
            Like.create(LikeTarget.UPCOMING_MEAL, upcoming.id, "voter@example.com")
        )

        result = await toggle.handle(
            ToggleUpcomingLikeCommand(upcoming_id=upcoming.id, verified_email="voter@example.com")
        )

        assert result.liked is False
        assert result.likes == 4
        assert await repositories.upcoming_meals.find_by_id(upcoming.id) is not None

    @pytest.mark.asyncio
    async def test_missing_upcoming_meal(self, toggle):
        with pytest.raises(UpcomingMealNotFoundError):
            await like_as(toggle, "missing", 1)

    @pytest.mark.asyncio
    async def test_like_after_promotion_is_not_found(self, repositories, toggle, upcoming):
        for n in range(THRESHOLD):
            await like_as(toggle, upcoming.id, n)

        with pytest.raises(UpcomingMealNotFoundError):
            await like_as(toggle, upcoming.id, 99)

    def test_threshold_must_be_positive(self, repositories, publisher):
        with pytest.raises(ValueError):
            ToggleUpcomingLikeCommandHandler(
                repositories.upcoming_meals, repositories.likes, publisher, threshold=0
            )


class TestPublishUpcomingMeal:
    @pytest.mark.asyncio
    async def test_explicit_publish(self, repositories, publisher, upcoming, event_bus):
        meal = await publisher.handle(PublishUpcomingMealCommand(upcoming_id=upcoming.id))

        assert meal.title == "Bibimbap"
        assert await repositories.upcoming_meals.find_by_id(upcoming.id) is None
        assert event_bus.publish.await_args.args[0].automatic is False

    @pytest.mark.asyncio
    async def test_explicit_publish_of_missing_meal(self, publisher):
        with pytest.raises(UpcomingMealNotFoundError):
            await publisher.handle(PublishUpcomingMealCommand(upcoming_id="missing"))

    @pytest.mark.asyncio
    async def test_concurrent_promotions_create_one_catalog_meal(
        self, repositories, publisher, upcoming
    ):
        results = await asyncio.gather(
            publisher.handle(PublishUpcomingMealCommand(upcoming_id=upcoming.id, automatic=True)),
            publisher.handle(PublishUpcomingMealCommand(upcoming_id=upcoming.id, automatic=True)),
        )

        promoted = [meal for meal in results if meal is not None]
        assert len(promoted) == 1
        page = await repositories.meals.search(CatalogQuery.from_params(search="Bibimbap"))
        assert page.total == 1

    @pytest.mark.asyncio
    async def test_failed_catalog_insert_restores_upcoming_meal(
        self, repositories, publisher, toggle, upcoming, event_bus
    ):
        await like_as(toggle, upcoming.id, 1)
        repositories.meals.insert = AsyncMock(side_effect=StoreError("insert failed"))

        with pytest.raises(StoreError):
            await publisher.handle(PublishUpcomingMealCommand(upcoming_id=upcoming.id))

        restored = await repositories.upcoming_meals.find_by_id(upcoming.id)
        assert restored is not None
        assert restored.likes == 1
        assert await repositories.likes.liked_by(LikeTarget.UPCOMING_MEAL, upcoming.id) == [
            "voter1@example.com"
        ]
        event_bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_like_transfer_removes_catalog_meal(
        self, repositories, publisher, upcoming
    ):
        repositories.likes.transfer = AsyncMock(side_effect=StoreError("transfer failed"))

        with pytest.raises(StoreError):
            await publisher.handle(PublishUpcomingMealCommand(upcoming_id=upcoming.id))

        assert await repositories.upcoming_meals.find_by_id(upcoming.id) is not None
        page = await repositories.meals.search(CatalogQuery.from_params(search="Bibimbap"))
        assert page.total == 0

    @pytest.mark.asyncio
    async def test_like_racing_promotion_is_counted_on_catalog_meal(
        self, repositories, publisher, upcoming
    ):
        # The promotion lands between the like insert and the counter update
        promoted = {}
        increment = repositories.upcoming_meals.increment_likes

        async def promote_then_increment(upcoming_id, delta):
            promoted["meal"] = await publisher.handle(
                PublishUpcomingMealCommand(upcoming_id=upcoming_id, automatic=True)
            )
            return await increment(upcoming_id, delta)

        counter = MagicMock()
        counter.increment_likes = AsyncMock(side_effect=promote_then_increment)
        toggler = LikeToggler(
            repositories.likes, counter, LikeTarget.UPCOMING_MEAL, UpcomingMealNotFoundError
        )

        with pytest.raises(UpcomingMealNotFoundError):
            await toggler.toggle(upcoming.id, "late@example.com")

        meal = await repositories.meals.find_by_id(promoted["meal"].id)
        assert meal.likes == 1
        assert await repositories.likes.liked_by(LikeTarget.MEAL, meal.id) == ["late@example.com"]
