"""Core entities for meal domain."""

from .meal import Meal
from .upcoming_meal import UpcomingMeal
from .review import Review
from .like import Like, LikeTarget

__all__ = ["Meal", "UpcomingMeal", "Review", "Like", "LikeTarget"]
