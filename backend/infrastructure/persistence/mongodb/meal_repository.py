"""MongoDB implementation of meal repository.

Provides persistent storage for catalog meals.
Uses MongoBaseRepository for common patterns.
"""

import logging
from typing import Any, Dict, List, Optional

from domain.meal.core.entities.meal import RATING_VALUES, Meal
from domain.meal.core.ports.meal_repository import IMealRepository
from domain.meal.core.value_objects.catalog_query import CatalogQuery, SortOrder
from domain.meal.core.value_objects.rating import RatingChange
from domain.shared.errors import StoreError
from domain.shared.identity import normalize_email
from domain.shared.pagination import Page
from infrastructure.persistence.mongodb.base import MongoBaseRepository

logger = logging.getLogger(__name__)

# Entity attribute -> document field
_SORT_DOCUMENT_FIELDS = {
    "post_time": "postTime",
    "price": "price",
    "likes": "likes",
    "rating": "rating",
    "reviews_count": "reviews_count",
    "title": "title",
}

# Compare-and-set attempts when a user changes an existing rating
_RATING_CAS_ATTEMPTS = 5


def _average_rating_pipeline() -> List[Dict[str, Any]]:
    """Pipeline update recomputing the stored average from the histogram."""
    buckets = [{"$ifNull": [f"$ratings.{value}", 0]} for value in RATING_VALUES]
    weighted = [{"$multiply": [bucket, value]} for bucket, value in zip(buckets, RATING_VALUES)]
    return [
        {
            "$set": {
                "rating": {
                    "$let": {
                        "vars": {"total": {"$add": buckets}},
                        "in": {
                            "$cond": [
                                {"$gt": ["$$total", 0]},
                                {"$round": [{"$divide": [{"$add": weighted}, "$$total"]}, 2]},
                                "$rating",
                            ]
                        },
                    }
                }
            }
        }
    ]


class MongoMealRepository(MongoBaseRepository[Meal], IMealRepository):
    """
    MongoDB implementation of meal repository.

    Document Schema:
    {
        "_id": "uuid-string",
        "title": "Paneer Tikka",
        "category": "Dinner",
        "price": 12.5,
        "description": "...",
        "ingredients": ["paneer", "yogurt"],
        "image": "https://...",
        "distributorEmail": "chef@bitelog.io",
        "distributorName": "Chef",
        "rating": 4.5,                       # average of the histogram
        "likes": 3,
        "reviews_count": 2,
        "ratings": {"1": 0, "2": 0, "3": 0, "4": 1, "5": 1},
        "userRatings": [{"email": "...", "value": 4}],
        "postTime": ISODate(...)
    }

    Emails are not valid field names (dots), so per-user ratings live in an
    array of subdocuments instead of a mapping.

    Indexes (see indexes.py):
    - text(title 10, description 1, category 5, ingredients 3)
    - distributorEmail, category, postTime
    """

    collection_name = "meals"

    def to_document(self, entity: Meal) -> Dict[str, Any]:
        return {
            "_id": entity.id,
            "title": entity.title,
            "category": entity.category,
            "price": entity.price,
            "description": entity.description,
            "ingredients": list(entity.ingredients),
            "image": entity.image,
            "distributorEmail": entity.distributor_email,
            "distributorName": entity.distributor_name,
            "rating": entity.average_rating,
            "likes": entity.likes,
            "reviews_count": entity.reviews_count,
            "ratings": {str(value): count for value, count in entity.ratings.items()},
            "userRatings": [
                {"email": email, "value": value} for email, value in entity.user_ratings.items()
            ],
            "postTime": entity.post_time,
        }

    def from_document(self, doc: Dict[str, Any]) -> Meal:
        return Meal(
            id=str(doc["_id"]),
            title=doc["title"],
            category=doc["category"],
            price=float(doc["price"]),
            distributor_email=doc["distributorEmail"],
            post_time=self.as_utc(doc["postTime"]),
            description=doc.get("description") or "",
            ingredients=list(doc.get("ingredients") or []),
            image=doc.get("image"),
            distributor_name=doc.get("distributorName"),
            rating=float(doc.get("rating") or 0.0),
            likes=int(doc.get("likes", 0)),
            reviews_count=max(int(doc.get("reviews_count", 0)), 0),
            ratings={int(k): int(v) for k, v in (doc.get("ratings") or {}).items()},
            user_ratings={
                entry["email"]: int(entry["value"]) for entry in doc.get("userRatings") or []
            },
        )

    def _filter_for(self, query: CatalogQuery) -> Dict[str, Any]:
        filter_dict: Dict[str, Any] = {}
        if query.search:
            filter_dict["$text"] = {"$search": query.search}
        if query.category:
            filter_dict["category"] = query.category
        if query.price_range:
            filter_dict["price"] = {
                "$gte": query.price_range.minimum,
                "$lte": query.price_range.maximum,
            }
        if query.has_reviews:
            filter_dict["reviews_count"] = {"$gt": 0}
        return filter_dict

    async def insert(self, meal: Meal) -> None:
        if not await self._insert_one(self.to_document(meal)):
            raise StoreError(f"Duplicate meal id {meal.id}")

    async def find_by_id(self, meal_id: str) -> Optional[Meal]:
        document = await self._find_one({"_id": meal_id})
        return self.from_document(document) if document else None

    async def search(self, query: CatalogQuery) -> Page[Meal]:
        """
        Run a catalog query.

        With a search term the $text score orders the results; otherwise the
        requested field and direction, with _id as tie-breaker so pages are
        stable.
        """
        filter_dict = self._filter_for(query)

        if query.search:
            projection: Optional[Dict[str, Any]] = {"score": {"$meta": "textScore"}}
            sort: List[Any] = [("score", {"$meta": "textScore"})]
        else:
            projection = None
            direction = 1 if query.order == SortOrder.ASC else -1
            sort = [(_SORT_DOCUMENT_FIELDS[query.sort_attribute], direction), ("_id", 1)]

        total = await self._count(filter_dict)
        documents = await self._find_many(
            filter_dict,
            sort=sort,
            skip=query.skip,
            limit=query.page_size,
            projection=projection,
        )
        return Page(
            items=[self.from_document(doc) for doc in documents],
            total=total,
            page=query.page,
            page_size=query.page_size,
        )

    async def update_fields(self, meal_id: str, changes: Dict[str, Any]) -> Optional[Meal]:
        document = await self._find_one_and_update({"_id": meal_id}, {"$set": dict(changes)})
        return self.from_document(document) if document else None

    async def delete(self, meal_id: str) -> bool:
        return await self._delete_one({"_id": meal_id}) > 0

    async def increment_likes(self, meal_id: str, delta: int) -> Optional[int]:
        return await self._increment_counter(meal_id, "likes", delta)

    async def increment_reviews_count(self, meal_id: str, delta: int) -> Optional[int]:
        return await self._increment_counter(meal_id, "reviews_count", delta)

    async def record_rating(self, meal_id: str, email: str, value: int) -> Optional[RatingChange]:
        """
        Record or change a user's rating.

        First rating: one update guarded by the user not being in userRatings
        pushes the entry and bumps the bucket and reviews_count.
        Change: compare-and-set on the user's previous value moves them between
        buckets; retried when another request changed it concurrently.
        """
        email = normalize_email(email)

        first = await self._find_one_and_update(
            {"_id": meal_id, "userRatings.email": {"$ne": email}},
            {
                "$push": {"userRatings": {"email": email, "value": value}},
                "$inc": {f"ratings.{value}": 1, "reviews_count": 1},
            },
            projection={"_id": 1},
        )
        if first is not None:
            await self._update_one({"_id": meal_id}, _average_rating_pipeline())
            return RatingChange(previous=None, current=value)

        for _ in range(_RATING_CAS_ATTEMPTS):
            document = await self._find_one(
                {"_id": meal_id}, {"userRatings": {"$elemMatch": {"email": email}}}
            )
            if document is None:
                return None

            entries = document.get("userRatings") or []
            if not entries:
                # Entry vanished since the guarded push failed; treat as a retry
                continue
            previous = int(entries[0]["value"])
            if previous == value:
                return RatingChange(previous=previous, current=value)

            matched, _ = await self._update_one(
                {
                    "_id": meal_id,
                    "userRatings": {"$elemMatch": {"email": email, "value": previous}},
                },
                {
                    "$set": {"userRatings.$.value": value},
                    "$inc": {f"ratings.{previous}": -1, f"ratings.{value}": 1},
                },
            )
            if matched:
                await self._update_one({"_id": meal_id}, _average_rating_pipeline())
                return RatingChange(previous=previous, current=value)

        logger.error(
            "meal.rating_contention",
            extra={"meal_id": meal_id, "attempts": _RATING_CAS_ATTEMPTS},
        )
        raise StoreError("Could not record rating")

    async def count_by_distributor(self, email: str) -> int:
        return await self._count({"distributorEmail": normalize_email(email)})

    async def find_by_distributor(self, email: str) -> List[Meal]:
        documents = await self._find_many(
            {"distributorEmail": normalize_email(email)},
            sort=[("postTime", -1)],
        )
        return [self.from_document(doc) for doc in documents]

    async def distinct_categories(self) -> List[str]:
        categories = await self._distinct("category")
        return sorted(category for category in categories if category)
