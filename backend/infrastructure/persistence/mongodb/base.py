"""Base MongoDB repository with reusable patterns.

Provides common functionality for all MongoDB repositories:
- Collection handle from a shared database
- Document mapping (domain ↔ MongoDB)
- Error handling (logged, surfaced as StoreError)
- Logging

All concrete MongoDB repositories should inherit from MongoBaseRepository.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
import logging
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from domain.shared.errors import StoreError
from infrastructure.config import get_mongodb_database, get_mongodb_uri


TEntity = TypeVar("TEntity")

logger = logging.getLogger(__name__)


def create_client() -> AsyncIOMotorClient:
    """
    Create a Motor client from configuration.

    Raises:
        ValueError: If MONGODB_URI is not configured
    """
    uri = get_mongodb_uri()
    if not uri:
        raise ValueError(
            "MONGODB_URI not configured. "
            "Set MONGODB_URI, MONGODB_USER, "
            "and MONGODB_PASSWORD environment variables."
        )
    return AsyncIOMotorClient(uri, tz_aware=True)


def get_database(client: AsyncIOMotorClient) -> AsyncIOMotorDatabase:
    return client[get_mongodb_database()]


class MongoBaseRepository(ABC, Generic[TEntity]):
    """
    Abstract base class for MongoDB repositories.

    Provides common functionality:
    - Document ↔ Entity mapping
    - Error handling with proper logging
    - Datetime handling (timezone-aware)

    Subclasses must implement:
    - collection_name: Name of MongoDB collection
    - to_document(): Convert domain entity to MongoDB document
    - from_document(): Convert MongoDB document to domain entity

    Example:
        class MongoMealRepository(MongoBaseRepository[Meal]):
            collection_name = "meals"

            def to_document(self, meal: Meal) -> Dict[str, Any]:
                ...

            def from_document(self, doc: Dict[str, Any]) -> Meal:
                ...
    """

    collection_name: str

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize repository.

        Args:
            db: Motor database shared by all repositories
        """
        self._db = db
        self._collection = db[self.collection_name]

        logger.debug(
            "Initialized repository",
            extra={"repository": self.__class__.__name__, "collection": self.collection_name},
        )

    @abstractmethod
    def to_document(self, entity: TEntity) -> Dict[str, Any]:
        pass

    @abstractmethod
    def from_document(self, doc: Dict[str, Any]) -> TEntity:
        """
        Convert MongoDB document to domain entity.

        Raises:
            ValueError: If document is invalid or missing required fields
        """
        pass

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """Get MongoDB collection handle."""
        return self._collection

    @staticmethod
    def as_utc(value: Optional[datetime]) -> Optional[datetime]:
        """Attach UTC to naive datetimes read back from BSON."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def _failed(self, operation: str, error: Exception, filter_dict: Any = None) -> StoreError:
        logger.error(
            "mongodb.operation_failed",
            extra={
                "operation": operation,
                "collection": self.collection_name,
                "filter": filter_dict,
                "error": str(error),
            },
        )
        return StoreError(f"{operation} failed on {self.collection_name}")

    async def _find_one(
        self,
        filter_dict: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        try:
            return await self._collection.find_one(filter_dict, projection)
        except PyMongoError as e:
            raise self._failed("find_one", e, filter_dict) from e

    async def _find_many(
        self,
        filter_dict: Dict[str, Any],
        sort: Optional[List[Tuple[str, Any]]] = None,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
        projection: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents with error handling.

        Args:
            filter_dict: MongoDB filter
            sort: Sort keys [(field, direction), ...]
            limit: Max documents to return
            skip: Documents to skip
            projection: Optional projection

        Raises:
            StoreError: If MongoDB operation fails (logged)
        """
        try:
            cursor = self._collection.find(filter_dict, projection)

            if sort:
                cursor = cursor.sort(sort)
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)

            return await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise self._failed("find_many", e, filter_dict) from e

    async def _insert_one(self, document: Dict[str, Any]) -> bool:
        """
        Insert single document with error handling.

        Returns:
            True if inserted, False if a unique index rejected it
        """
        try:
            await self._collection.insert_one(document)
            return True
        except DuplicateKeyError:
            return False
        except PyMongoError as e:
            raise self._failed("insert_one", e) from e

    async def _update_one(
        self,
        filter_dict: Dict[str, Any],
        update: Any,
        upsert: bool = False,
    ) -> Tuple[int, Optional[Any]]:
        """
        Update single document with error handling.

        Returns:
            (matched_count, upserted_id)
        """
        try:
            result = await self._collection.update_one(filter_dict, update, upsert=upsert)
            return result.matched_count, result.upserted_id
        except DuplicateKeyError as e:
            if not upsert:
                raise self._failed("update_one", e, filter_dict) from e
            # Concurrent upsert on the same unique key: the other writer inserted
            return 1, None
        except PyMongoError as e:
            raise self._failed("update_one", e, filter_dict) from e

    async def _update_many(self, filter_dict: Dict[str, Any], update: Any) -> int:
        try:
            result = await self._collection.update_many(filter_dict, update)
            return result.modified_count
        except PyMongoError as e:
            raise self._failed("update_many", e, filter_dict) from e

    async def _find_one_and_update(
        self,
        filter_dict: Dict[str, Any],
        update: Any,
        projection: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Apply an update and return the document after it, None if no match."""
        try:
            return await self._collection.find_one_and_update(
                filter_dict,
                update,
                projection=projection,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._failed("find_one_and_update", e, filter_dict) from e

    async def _find_one_and_delete(self, filter_dict: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return await self._collection.find_one_and_delete(filter_dict)
        except PyMongoError as e:
            raise self._failed("find_one_and_delete", e, filter_dict) from e

    async def _delete_one(self, filter_dict: Dict[str, Any]) -> int:
        try:
            result = await self._collection.delete_one(filter_dict)
            return result.deleted_count
        except PyMongoError as e:
            raise self._failed("delete_one", e, filter_dict) from e

    async def _delete_many(self, filter_dict: Dict[str, Any]) -> int:
        try:
            result = await self._collection.delete_many(filter_dict)
            return result.deleted_count
        except PyMongoError as e:
            raise self._failed("delete_many", e, filter_dict) from e

    async def _count(self, filter_dict: Dict[str, Any]) -> int:
        try:
            return await self._collection.count_documents(filter_dict)
        except PyMongoError as e:
            raise self._failed("count", e, filter_dict) from e

    async def _distinct(self, key: str, filter_dict: Optional[Dict[str, Any]] = None) -> List[Any]:
        try:
            return await self._collection.distinct(key, filter_dict or {})
        except PyMongoError as e:
            raise self._failed("distinct", e, filter_dict) from e

    async def _increment_counter(self, entity_id: str, field: str, delta: int) -> Optional[int]:
        """
        Atomically add delta to a non-negative counter.

        Decrements are conditional on the counter being large enough, so
        concurrent decrements can never drive it below 0.

        Returns:
            Counter value after the update, or None if the document is absent
        """
        if delta > 0:
            document = await self._find_one_and_update(
                {"_id": entity_id}, {"$inc": {field: delta}}, projection={field: 1}
            )
        elif delta < 0:
            document = await self._find_one_and_update(
                {"_id": entity_id, field: {"$gte": -delta}},
                {"$inc": {field: delta}},
                projection={field: 1},
            )
            if document is None:
                # Either absent or already at the floor
                document = await self._find_one({"_id": entity_id}, {field: 1})
        else:
            document = await self._find_one({"_id": entity_id}, {field: 1})

        if document is None:
            return None
        return max(int(document.get(field, 0)), 0)
