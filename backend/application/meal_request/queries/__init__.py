from .list_meal_requests import ListMealRequestsQuery

__all__ = ["ListMealRequestsQuery"]
