"""CQRS Commands for meal domain."""

from .add_meal import AddMealCommand, AddMealCommandHandler
from .update_meal import UpdateMealCommand, UpdateMealCommandHandler
from .delete_meal import DeleteMealCommand, DeleteMealCommandHandler
from .toggle_like import ToggleMealLikeCommand, ToggleMealLikeCommandHandler
from .rate_meal import RateMealCommand, RateMealCommandHandler

__all__ = [
    "AddMealCommand",
    "AddMealCommandHandler",
    "UpdateMealCommand",
    "UpdateMealCommandHandler",
    "DeleteMealCommand",
    "DeleteMealCommandHandler",
    "ToggleMealLikeCommand",
    "ToggleMealLikeCommandHandler",
    "RateMealCommand",
    "RateMealCommandHandler",
]
