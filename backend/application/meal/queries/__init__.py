"""CQRS Queries for Meal domain."""

from .distributor_meals import DistributorMealsQuery
from .get_meal import GetMealQuery, GetMealQueryHandler, MealDetail
from .list_categories import ListCategoriesQueryHandler
from .search_catalog import SearchCatalogQueryHandler

__all__ = [
    "DistributorMealsQuery",
    "GetMealQuery",
    "GetMealQueryHandler",
    "MealDetail",
    "ListCategoriesQueryHandler",
    "SearchCatalogQueryHandler",
]
