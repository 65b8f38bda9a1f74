"""Unit tests for Meal, UpcomingMeal, Review and Rating."""

import pytest
from datetime import datetime, timezone

from domain.meal.core.entities.meal import Meal, validate_changes
from domain.meal.core.entities.review import Review, clean_text
from domain.meal.core.entities.upcoming_meal import UpcomingMeal
from domain.meal.core.exceptions.meal_errors import (
    InvalidMealError,
    InvalidRatingError,
    ReviewTextRequiredError,
)
from domain.meal.core.value_objects.rating import Rating, RatingChange


def make_meal(**overrides) -> Meal:
    fields = {
        "title": "Paneer Tikka",
        "category": "Dinner",
        "price": 12.5,
        "distributor_email": "Chef@BiteLog.io",
    }
    fields.update(overrides)
    return Meal.create(**fields)


class TestMeal:
    def test_create_zeroes_counters(self):
        meal = make_meal()

        assert meal.likes == 0
        assert meal.reviews_count == 0
        assert meal.rating == 0.0
        assert meal.ratings == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}
        assert meal.distributor_email == "chef@bitelog.io"
        assert meal.post_time.tzinfo is not None

    @pytest.mark.parametrize(
        "overrides",
        [{"title": "  "}, {"category": ""}, {"price": -1}],
    )
    def test_invalid_details(self, overrides):
        with pytest.raises(InvalidMealError):
            make_meal(**overrides)

    def test_average_rating_from_histogram(self):
        meal = make_meal()
        meal.ratings = {1: 0, 2: 0, 3: 1, 4: 1, 5: 1}

        assert meal.average_rating == 4.0

    def test_average_rating_rounded_to_two_decimals(self):
        meal = make_meal()
        meal.ratings = {1: 0, 2: 0, 3: 0, 4: 1, 5: 2}

        assert meal.average_rating == 4.67

    def test_is_managed_by(self):
        meal = make_meal()

        assert meal.is_managed_by("CHEF@bitelog.io", is_admin=False)
        assert meal.is_managed_by("other@bitelog.io", is_admin=True)
        assert not meal.is_managed_by("other@bitelog.io", is_admin=False)

    def test_to_dict(self):
        data = make_meal(ingredients=["paneer", "yogurt"]).to_dict()

        assert data["title"] == "Paneer Tikka"
        assert data["distributorEmail"] == "chef@bitelog.io"
        assert data["ingredients"] == ["paneer", "yogurt"]
        assert data["reviews_count"] == 0
        assert set(data["ratings"]) == {"1", "2", "3", "4", "5"}


class TestValidateChanges:
    def test_editable_fields_accepted(self):
        changes = {"title": "New", "price": 3.5}
        assert validate_changes(changes) == changes

    def test_empty_changes_rejected(self):
        with pytest.raises(InvalidMealError, match="No changes"):
            validate_changes({})

    @pytest.mark.parametrize("field", ["likes", "reviews_count", "distributor_email", "id"])
    def test_system_fields_rejected(self, field):
        with pytest.raises(InvalidMealError, match="not editable"):
            validate_changes({field: 1})

    def test_blank_title_rejected(self):
        with pytest.raises(InvalidMealError):
            validate_changes({"title": " "})


class TestUpcomingMeal:
    def test_promote_builds_catalog_meal(self):
        upcoming = UpcomingMeal.create(
            title="Ramen",
            category="Lunch",
            price=9,
            distributor_email="chef@bitelog.io",
            ingredients=["noodles"],
        )
        upcoming.likes = 10
        published_at = datetime(2025, 3, 1, tzinfo=timezone.utc)

        meal = upcoming.promote(published_at=published_at)

        assert meal.id != upcoming.id
        assert meal.title == "Ramen"
        assert meal.likes == 10
        assert meal.reviews_count == 0
        assert meal.post_time == published_at
        assert meal.ingredients == ["noodles"]


class TestReview:
    def test_create_strips_text(self):
        review = Review.create("m1", "Ramen", "Jane@Example.com", "  tasty  ")

        assert review.text == "tasty"
        assert review.email == "jane@example.com"
        assert review.created_at == review.updated_at

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_text_rejected(self, text):
        with pytest.raises(ReviewTextRequiredError):
            clean_text(text)

    def test_is_authored_by(self):
        review = Review.create("m1", "Ramen", "jane@example.com", "ok")

        assert review.is_authored_by("JANE@example.com")
        assert not review.is_authored_by("bob@example.com")


class TestRating:
    @pytest.mark.parametrize("raw, expected", [(1, 1), (5, 5), ("4", 4), (3.0, 3)])
    def test_parse_valid(self, raw, expected):
        assert Rating.parse(raw).value == expected

    @pytest.mark.parametrize("raw", [0, 6, 4.5, "five", None, True, ""])
    def test_parse_invalid(self, raw):
        with pytest.raises(InvalidRatingError):
            Rating.parse(raw)

    def test_rating_change_first(self):
        assert RatingChange(previous=None, current=4).is_first
        assert not RatingChange(previous=3, current=4).is_first
