"""Unit tests for catalog query value objects."""

import pytest

from domain.meal.core.value_objects.catalog_query import (
    CatalogQuery,
    PriceRange,
    SortOrder,
)
from domain.shared.errors import ValidationError


class TestPriceRange:
    def test_parse_valid_range(self):
        price_range = PriceRange.parse("5-15")

        assert price_range == PriceRange(minimum=5.0, maximum=15.0)
        assert price_range.contains(5)
        assert price_range.contains(15)
        assert not price_range.contains(15.01)

    @pytest.mark.parametrize("raw", ["abc-15", "5", "5-10-15", "-", "nan-nan", "inf-inf", "0-inf"])
    def test_parse_malformed_range(self, raw):
        with pytest.raises(ValidationError):
            PriceRange.parse(raw)

    def test_inverted_range_rejected(self):
        with pytest.raises(ValidationError):
            PriceRange.parse("20-10")


class TestCatalogQuery:
    def test_defaults(self):
        query = CatalogQuery.from_params()

        assert query.page == 1
        assert query.search is None
        assert query.sort_by == "postTime"
        assert query.sort_attribute == "post_time"
        assert query.order == SortOrder.DESC
        assert query.skip == 0

    def test_page_below_one_is_page_one(self):
        assert CatalogQuery.from_params(page=0).page == 1

    def test_skip_for_page_three(self):
        assert CatalogQuery.from_params(page=3).skip == 20

    def test_blank_search_and_category_ignored(self):
        query = CatalogQuery.from_params(search="   ", category="")

        assert query.search is None
        assert query.category is None

    def test_sort_field_and_order(self):
        query = CatalogQuery.from_params(sort_by="price", order="ASC")

        assert query.sort_attribute == "price"
        assert query.order == SortOrder.ASC

    def test_unknown_sort_field(self):
        with pytest.raises(ValidationError, match="sort field"):
            CatalogQuery.from_params(sort_by="calories")

    def test_unknown_order(self):
        with pytest.raises(ValidationError, match="sort order"):
            CatalogQuery.from_params(order="sideways")

    def test_price_range_parsed(self):
        query = CatalogQuery.from_params(price_range="5-15")

        assert query.price_range == PriceRange(5.0, 15.0)
