from .meal_request import MealRequest, RequestStatus

__all__ = ["MealRequest", "RequestStatus"]
