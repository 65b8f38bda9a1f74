"""Unit tests for review commands and queries."""

import pytest
import pytest_asyncio

from application.review.commands import (
    CreateReviewCommand,
    CreateReviewCommandHandler,
    DeleteReviewCommand,
    DeleteReviewCommandHandler,
    UpdateReviewCommand,
    UpdateReviewCommandHandler,
)
from application.review.queries import ListReviewsQuery
from domain.meal.core.entities.meal import Meal
from domain.meal.core.exceptions.meal_errors import (
    MealNotFoundError,
    ReviewNotFoundError,
    ReviewOwnershipError,
    ReviewTextRequiredError,
)
from domain.shared.errors import AuthenticationError, AuthorizationError


@pytest_asyncio.fixture
async def meal(repositories):
    meal = Meal.create(title="Ramen", category="Lunch", price=9, distributor_email="chef@bitelog.io")
    await repositories.meals.insert(meal)
    return meal


@pytest_asyncio.fixture
async def review(repositories, meal):
    handler = CreateReviewCommandHandler(repositories.reviews, repositories.meals)
    return await handler.handle(
        CreateReviewCommand(
            meal_id=meal.id,
            verified_email="jane@example.com",
            text="  Rich broth  ",
            email="jane@example.com",
            username="Jane",
        )
    )


class TestCreateReview:
    @pytest.mark.asyncio
    async def test_create_snapshots_title_and_counts(self, repositories, meal, review):
        assert review.text == "Rich broth"
        assert review.meal_title == "Ramen"
        assert (await repositories.meals.find_by_id(meal.id)).reviews_count == 1

    @pytest.mark.asyncio
    async def test_title_snapshot_not_refreshed(self, repositories, meal, review):
        await repositories.meals.update_fields(meal.id, {"title": "Tonkotsu Ramen"})

        stored = await repositories.reviews.find_by_id(review.id)

        assert stored.meal_title == "Ramen"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", None])
    async def test_blank_text_rejected(self, repositories, meal, text):
        handler = CreateReviewCommandHandler(repositories.reviews, repositories.meals)

        with pytest.raises(ReviewTextRequiredError):
            await handler.handle(
                CreateReviewCommand(meal_id=meal.id, verified_email="jane@example.com", text=text)
            )

        assert (await repositories.meals.find_by_id(meal.id)).reviews_count == 0

    @pytest.mark.asyncio
    async def test_missing_meal(self, repositories):
        handler = CreateReviewCommandHandler(repositories.reviews, repositories.meals)

        with pytest.raises(MealNotFoundError):
            await handler.handle(
                CreateReviewCommand(meal_id="missing", verified_email="jane@example.com", text="ok")
            )

    @pytest.mark.asyncio
    async def test_identity_mismatch(self, repositories, meal):
        handler = CreateReviewCommandHandler(repositories.reviews, repositories.meals)

        with pytest.raises(AuthorizationError):
            await handler.handle(
                CreateReviewCommand(
                    meal_id=meal.id,
                    verified_email="jane@example.com",
                    email="bob@example.com",
                    text="ok",
                )
            )


class TestUpdateReview:
    @pytest.mark.asyncio
    async def test_author_updates_text(self, repositories, review):
        updated = await UpdateReviewCommandHandler(repositories.reviews).handle(
            UpdateReviewCommand(review_id=review.id, verified_email="jane@example.com", text="Even better")
        )

        assert updated.text == "Even better"
        assert updated.updated_at >= review.created_at

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, repositories, review):
        with pytest.raises(ReviewOwnershipError):
            await UpdateReviewCommandHandler(repositories.reviews).handle(
                UpdateReviewCommand(review_id=review.id, verified_email="bob@example.com", text="Bad")
            )

        assert (await repositories.reviews.find_by_id(review.id)).text == "Rich broth"

    @pytest.mark.asyncio
    async def test_missing_review(self, repositories):
        with pytest.raises(ReviewNotFoundError):
            await UpdateReviewCommandHandler(repositories.reviews).handle(
                UpdateReviewCommand(review_id="missing", verified_email="bob@example.com", text="x")
            )


class TestDeleteReview:
    @pytest.mark.asyncio
    async def test_author_deletes_and_counter_follows(self, repositories, meal, review):
        await DeleteReviewCommandHandler(repositories.reviews, repositories.meals).handle(
            DeleteReviewCommand(review_id=review.id, verified_email="jane@example.com")
        )

        assert await repositories.reviews.find_by_id(review.id) is None
        assert (await repositories.meals.find_by_id(meal.id)).reviews_count == 0

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, repositories, review):
        with pytest.raises(ReviewOwnershipError):
            await DeleteReviewCommandHandler(repositories.reviews, repositories.meals).handle(
                DeleteReviewCommand(review_id=review.id, verified_email="bob@example.com")
            )

        assert await repositories.reviews.find_by_id(review.id) is not None

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, repositories, review):
        with pytest.raises(AuthenticationError):
            await DeleteReviewCommandHandler(repositories.reviews, repositories.meals).handle(
                DeleteReviewCommand(review_id=review.id, verified_email=None)
            )

    @pytest.mark.asyncio
    async def test_reviews_count_floored_at_zero(self, repositories, meal, review):
        await repositories.meals.increment_reviews_count(meal.id, -1)

        await DeleteReviewCommandHandler(repositories.reviews, repositories.meals).handle(
            DeleteReviewCommand(review_id=review.id, verified_email="jane@example.com")
        )

        assert (await repositories.meals.find_by_id(meal.id)).reviews_count == 0


class TestListReviews:
    @pytest.mark.asyncio
    async def test_for_meal_and_author(self, repositories, meal, review):
        query = ListReviewsQuery(repositories.reviews, repositories.meals)

        assert [r.id for r in await query.for_meal(meal.id)] == [review.id]
        assert [r.id for r in await query.by_author("JANE@example.com")] == [review.id]
        assert await query.by_author("bob@example.com") == []

    @pytest.mark.asyncio
    async def test_for_missing_meal(self, repositories):
        with pytest.raises(MealNotFoundError):
            await ListReviewsQuery(repositories.reviews, repositories.meals).for_meal("missing")

    @pytest.mark.asyncio
    async def test_all_is_paginated(self, repositories, meal):
        handler = CreateReviewCommandHandler(repositories.reviews, repositories.meals)
        for n in range(12):
            await handler.handle(
                CreateReviewCommand(meal_id=meal.id, verified_email=f"u{n}@example.com", text=f"r{n}")
            )

        page = await ListReviewsQuery(repositories.reviews, repositories.meals).all(page=2)

        assert page.total == 12
        assert len(page.items) == 2
