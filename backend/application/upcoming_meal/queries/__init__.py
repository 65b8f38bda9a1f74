from .list_upcoming_meals import ListUpcomingMealsQueryHandler

__all__ = ["ListUpcomingMealsQueryHandler"]
