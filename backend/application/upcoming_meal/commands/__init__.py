"""CQRS Commands for upcoming meals."""

from .submit_upcoming_meal import SubmitUpcomingMealCommand, SubmitUpcomingMealCommandHandler
from .publish_upcoming_meal import PublishUpcomingMealCommand, PublishUpcomingMealCommandHandler
from .toggle_upcoming_like import (
    ToggleUpcomingLikeCommand,
    ToggleUpcomingLikeCommandHandler,
    UpcomingLikeResult,
)

__all__ = [
    "SubmitUpcomingMealCommand",
    "SubmitUpcomingMealCommandHandler",
    "PublishUpcomingMealCommand",
    "PublishUpcomingMealCommandHandler",
    "ToggleUpcomingLikeCommand",
    "ToggleUpcomingLikeCommandHandler",
    "UpcomingLikeResult",
]
