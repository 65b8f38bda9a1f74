"""MongoDB repository implementations."""

from .base import MongoBaseRepository, create_client, get_database
from .indexes import ensure_indexes
from .like_repository import MongoLikeRepository
from .meal_repository import MongoMealRepository
from .meal_request_repository import MongoMealRequestRepository
from .membership_repository import MongoMembershipRepository
from .payment_repository import MongoPaymentRepository
from .review_repository import MongoReviewRepository
from .upcoming_meal_repository import MongoUpcomingMealRepository

__all__ = [
    "MongoBaseRepository",
    "create_client",
    "get_database",
    "ensure_indexes",
    "MongoLikeRepository",
    "MongoMealRepository",
    "MongoMealRequestRepository",
    "MongoMembershipRepository",
    "MongoPaymentRepository",
    "MongoReviewRepository",
    "MongoUpcomingMealRepository",
]
