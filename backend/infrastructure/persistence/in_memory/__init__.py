"""In-memory persistence implementations."""

from infrastructure.persistence.in_memory.like_repository import InMemoryLikeRepository
from infrastructure.persistence.in_memory.meal_repository import InMemoryMealRepository
from infrastructure.persistence.in_memory.meal_request_repository import (
    InMemoryMealRequestRepository,
)
from infrastructure.persistence.in_memory.membership_repository import (
    InMemoryMembershipRepository,
)
from infrastructure.persistence.in_memory.payment_repository import InMemoryPaymentRepository
from infrastructure.persistence.in_memory.review_repository import InMemoryReviewRepository
from infrastructure.persistence.in_memory.upcoming_meal_repository import (
    InMemoryUpcomingMealRepository,
)

__all__ = [
    "InMemoryLikeRepository",
    "InMemoryMealRepository",
    "InMemoryMealRequestRepository",
    "InMemoryMembershipRepository",
    "InMemoryPaymentRepository",
    "InMemoryReviewRepository",
    "InMemoryUpcomingMealRepository",
]
