"""MongoDB index definitions.

Run once at startup when REPOSITORY_BACKEND=mongodb. create_index is
idempotent, so repeated startups are safe.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, TEXT

logger = logging.getLogger(__name__)


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the unique keys and the weighted text index."""
    await db["users"].create_index([("email", ASCENDING)], unique=True, name="email_unique")

    await db["meals"].create_index(
        [
            ("title", TEXT),
            ("description", TEXT),
            ("category", TEXT),
            ("ingredients", TEXT),
        ],
        weights={"title": 10, "description": 1, "category": 5, "ingredients": 3},
        name="meal_text",
    )
    await db["meals"].create_index([("distributorEmail", ASCENDING)])
    await db["meals"].create_index([("category", ASCENDING)])
    await db["meals"].create_index([("postTime", DESCENDING)])

    await db["upcomingMeals"].create_index([("likes", DESCENDING), ("createdAt", ASCENDING)])

    await db["likes"].create_index(
        [("target", ASCENDING), ("entityId", ASCENDING), ("email", ASCENDING)],
        unique=True,
        name="like_unique",
    )

    await db["reviews"].create_index([("mealId", ASCENDING), ("createdAt", DESCENDING)])
    await db["reviews"].create_index([("email", ASCENDING)])

    await db["mealRequests"].create_index(
        [("mealId", ASCENDING), ("userEmail", ASCENDING)],
        unique=True,
        partialFilterExpression={"status": "pending"},
        name="pending_request_unique",
    )
    await db["mealRequests"].create_index([("userEmail", ASCENDING)])

    await db["payments"].create_index([("email", ASCENDING), ("paid_at", DESCENDING)])

    logger.info("mongodb.indexes_ensured", extra={"database": db.name})
