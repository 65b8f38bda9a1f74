"""Unit tests for catalog queries."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from application.meal.queries import (
    DistributorMealsQuery,
    GetMealQuery,
    GetMealQueryHandler,
    ListCategoriesQueryHandler,
    SearchCatalogQueryHandler,
)
from domain.meal.core.entities.like import Like, LikeTarget
from domain.meal.core.entities.meal import Meal
from domain.meal.core.entities.review import Review
from domain.meal.core.exceptions.meal_errors import MealNotFoundError
from domain.meal.core.value_objects.catalog_query import CatalogQuery

START = datetime(2025, 1, 1, tzinfo=timezone.utc)


def catalog_meal(index: int, **overrides) -> Meal:
    fields = {
        "title": f"Meal {index}",
        "category": "Lunch" if index % 2 else "Dinner",
        "price": float(index),
        "distributor_email": "chef@bitelog.io",
        "post_time": START + timedelta(hours=index),
    }
    fields.update(overrides)
    return Meal.create(**fields)


@pytest_asyncio.fixture
async def catalog(repositories):
    meals = [catalog_meal(i) for i in range(1, 26)]
    for meal in meals:
        await repositories.meals.insert(meal)
    return meals


class TestSearchCatalog:
    @pytest.mark.asyncio
    async def test_pages_of_ten(self, repositories, catalog):
        handler = SearchCatalogQueryHandler(repositories.meals)

        page_two = await handler.handle(CatalogQuery.from_params(page=2))
        page_three = await handler.handle(CatalogQuery.from_params(page=3))

        assert page_two.total == 25
        assert len(page_two.items) == 10
        assert len(page_three.items) == 5
        assert page_two.total_pages == 3

    @pytest.mark.asyncio
    async def test_default_order_is_newest_first(self, repositories, catalog):
        page = await SearchCatalogQueryHandler(repositories.meals).handle(CatalogQuery.from_params())

        assert [meal.title for meal in page.items[:3]] == ["Meal 25", "Meal 24", "Meal 23"]

    @pytest.mark.asyncio
    async def test_pages_do_not_overlap(self, repositories, catalog):
        handler = SearchCatalogQueryHandler(repositories.meals)
        seen = []
        for number in (1, 2, 3):
            page = await handler.handle(CatalogQuery.from_params(page=number, sort_by="price"))
            seen.extend(meal.id for meal in page.items)

        assert len(seen) == len(set(seen)) == 25

    @pytest.mark.asyncio
    async def test_category_and_price_filters(self, repositories, catalog):
        page = await SearchCatalogQueryHandler(repositories.meals).handle(
            CatalogQuery.from_params(category="Lunch", price_range="5-15", sort_by="price", order="asc")
        )

        assert [meal.price for meal in page.items] == [5.0, 7.0, 9.0, 11.0, 13.0, 15.0]
        assert page.total == 6

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, repositories, catalog):
        page = await SearchCatalogQueryHandler(repositories.meals).handle(
            CatalogQuery.from_params(page=9)
        )

        assert page.items == []
        assert page.total == 25

    @pytest.mark.asyncio
    async def test_search_ranks_title_matches_first(self, repositories):
        in_title = catalog_meal(1, title="Chicken Curry")
        in_ingredients = catalog_meal(2, title="Rice Bowl", ingredients=["chicken", "rice"])
        in_description = catalog_meal(3, title="Salad", description="grilled chicken strips")
        unrelated = catalog_meal(4, title="Tofu Stir Fry")
        for meal in (in_description, unrelated, in_ingredients, in_title):
            await repositories.meals.insert(meal)

        page = await SearchCatalogQueryHandler(repositories.meals).handle(
            CatalogQuery.from_params(search="Chicken")
        )

        assert [meal.title for meal in page.items] == ["Chicken Curry", "Rice Bowl", "Salad"]
        assert page.total == 3

    @pytest.mark.asyncio
    async def test_has_reviews_filter(self, repositories, catalog):
        await repositories.meals.increment_reviews_count(catalog[0].id, 1)

        page = await SearchCatalogQueryHandler(repositories.meals).handle(
            CatalogQuery.from_params(has_reviews=True)
        )

        assert [meal.id for meal in page.items] == [catalog[0].id]


class TestGetMeal:
    @pytest.mark.asyncio
    async def test_detail_includes_reviews_and_likers(self, repositories):
        meal = catalog_meal(1)
        await repositories.meals.insert(meal)
        for offset, (email, text) in enumerate([("a@example.com", "Good"), ("b@example.com", "Great")]):
            review = Review.create(
                meal.id, meal.title, email, text, created_at=START + timedelta(minutes=offset)
            )
            await repositories.reviews.insert(review)
            await repositories.meals.increment_reviews_count(meal.id, 1)
        await repositories.likes.add(Like.create(LikeTarget.MEAL, meal.id, "a@example.com"))

        handler = GetMealQueryHandler(repositories.meals, repositories.reviews, repositories.likes)
        detail = await handler.handle(GetMealQuery(meal_id=meal.id))

        assert detail.review_count == 2
        assert [review.text for review in detail.reviews] == ["Great", "Good"]
        assert detail.liked_by == ["a@example.com"]
        payload = detail.to_dict()
        assert payload["reviewCount"] == 2
        assert payload["meal"]["likedBy"] == ["a@example.com"]
        assert payload["meal"]["reviews_count"] == 2

    @pytest.mark.asyncio
    async def test_missing_meal(self, repositories):
        handler = GetMealQueryHandler(repositories.meals, repositories.reviews, repositories.likes)

        with pytest.raises(MealNotFoundError):
            await handler.handle(GetMealQuery(meal_id="missing"))


class TestCatalogLookups:
    @pytest.mark.asyncio
    async def test_categories_are_distinct(self, repositories, catalog):
        assert await ListCategoriesQueryHandler(repositories.meals).handle() == ["Dinner", "Lunch"]

    @pytest.mark.asyncio
    async def test_distributor_meals(self, repositories, catalog):
        await repositories.meals.insert(catalog_meal(99, distributor_email="other@bitelog.io"))
        query = DistributorMealsQuery(repositories.meals)

        assert await query.count("CHEF@bitelog.io") == 25
        assert [meal.title for meal in await query.list("other@bitelog.io")] == ["Meal 99"]
