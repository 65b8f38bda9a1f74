"""CQRS Commands for meal requests."""

from .create_meal_request import CreateMealRequestCommand, CreateMealRequestCommandHandler
from .serve_meal_request import ServeMealRequestCommand, ServeMealRequestCommandHandler
from .delete_meal_request import DeleteMealRequestCommand, DeleteMealRequestCommandHandler

__all__ = [
    "CreateMealRequestCommand",
    "CreateMealRequestCommandHandler",
    "ServeMealRequestCommand",
    "ServeMealRequestCommandHandler",
    "DeleteMealRequestCommand",
    "DeleteMealRequestCommandHandler",
]
