"""Repository Factory for Persistence Layer.

Environment-based repository selection.
Strategy:
- .env (runtime): REPOSITORY_BACKEND=mongodb (production persistence)
- tests: REPOSITORY_BACKEND=inmemory (fast, isolated tests)
- Default: inmemory (safe fallback if env vars not set)

All MongoDB repositories share one Motor client and database.

Usage:
    from infrastructure.persistence.factory import get_repositories

    repositories = get_repositories()   # Singleton bundle
    meal = await repositories.meals.find_by_id(meal_id)
"""

from dataclasses import dataclass
import logging
from typing import Any, Optional

from domain.meal.core.ports.like_repository import ILikeRepository
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.ports.review_repository import IReviewRepository
from domain.meal.core.ports.upcoming_meal_repository import IUpcomingMealRepository
from domain.meal_request.core.ports.meal_request_repository import IMealRequestRepository
from domain.membership.core.ports.membership_repository import IMembershipRepository
from domain.membership.core.ports.payment_repository import IPaymentRepository
from domain.user.core.ports.user_repository import IUserRepository
from infrastructure.config import get_repository_backend
from infrastructure.persistence.in_memory import (
    InMemoryLikeRepository,
    InMemoryMealRepository,
    InMemoryMealRequestRepository,
    InMemoryMembershipRepository,
    InMemoryPaymentRepository,
    InMemoryReviewRepository,
    InMemoryUpcomingMealRepository,
)
from infrastructure.persistence.mongodb import (
    MongoLikeRepository,
    MongoMealRepository,
    MongoMealRequestRepository,
    MongoMembershipRepository,
    MongoPaymentRepository,
    MongoReviewRepository,
    MongoUpcomingMealRepository,
    create_client,
    ensure_indexes,
    get_database,
)
from infrastructure.user.in_memory_user_repository import InMemoryUserRepository
from infrastructure.user.mongo_user_repository import MongoUserRepository

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """One repository per collection, all on the same backend."""

    users: IUserRepository
    meals: IMealRepository
    upcoming_meals: IUpcomingMealRepository
    likes: ILikeRepository
    reviews: IReviewRepository
    meal_requests: IMealRequestRepository
    memberships: IMembershipRepository
    payments: IPaymentRepository
    backend: str = "inmemory"
    client: Optional[Any] = None

    async def initialize(self) -> None:
        """Create MongoDB indexes (no-op for in-memory)."""
        if self.client is not None:
            await ensure_indexes(get_database(self.client))

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("mongodb.client_closed")


def create_in_memory_repositories() -> Repositories:
    return Repositories(
        users=InMemoryUserRepository(),
        meals=InMemoryMealRepository(),
        upcoming_meals=InMemoryUpcomingMealRepository(),
        likes=InMemoryLikeRepository(),
        reviews=InMemoryReviewRepository(),
        meal_requests=InMemoryMealRequestRepository(),
        memberships=InMemoryMembershipRepository(),
        payments=InMemoryPaymentRepository(),
        backend="inmemory",
    )


def create_mongo_repositories() -> Repositories:
    """
    Raises:
        ValueError: If MONGODB_URI is not set
    """
    client = create_client()
    db = get_database(client)
    return Repositories(
        users=MongoUserRepository(db),
        meals=MongoMealRepository(db),
        upcoming_meals=MongoUpcomingMealRepository(db),
        likes=MongoLikeRepository(db),
        reviews=MongoReviewRepository(db),
        meal_requests=MongoMealRequestRepository(db),
        memberships=MongoMembershipRepository(db),
        payments=MongoPaymentRepository(db),
        backend="mongodb",
        client=client,
    )


def create_repositories() -> Repositories:
    """Create repositories based on REPOSITORY_BACKEND env var.

    Environment variable: REPOSITORY_BACKEND
    Values:
        - "inmemory": In-memory repositories (default, fast, transient)
        - "mongodb": MongoDB repositories (persistent, requires MONGODB_URI)

    Raises:
        ValueError: On an unknown backend, or mongodb without MONGODB_URI
    """
    mode = get_repository_backend()

    if mode == "mongodb":
        repositories = create_mongo_repositories()
    elif mode == "inmemory":
        repositories = create_in_memory_repositories()
    else:
        raise ValueError(
            f"Invalid REPOSITORY_BACKEND value: {mode}. Expected 'inmemory' or 'mongodb'"
        )

    logger.info("repositories.created", extra={"backend": mode})
    return repositories


# Singleton instance (lazy initialization)
_repositories: Optional[Repositories] = None


def get_repositories() -> Repositories:
    global _repositories
    if _repositories is None:
        _repositories = create_repositories()
    return _repositories


def reset_repositories() -> None:
    """Reset singleton instance.

    Useful for testing to force re-creation with different env vars.
    """
    global _repositories
    if _repositories is not None:
        _repositories.close()
    _repositories = None
