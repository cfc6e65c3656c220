"""
Base repository class providing common CRUD operations.

All entity-specific repositories inherit from this base class.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.collection import Collection
from pymongo.results import InsertOneResult, UpdateResult

from talentmatch.core.exceptions import NotFound
from talentmatch.data.database import DatabaseManager, get_database_manager
from talentmatch.data.models.base import BaseDocument
from talentmatch.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Subclasses must define the collection name, the model class and the
    entity name used in NotFound errors.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    @property
    @abstractmethod
    def entity_name(self) -> str:
        """Human-readable entity name ("candidate", "job")."""
        pass

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        """Initialize repository with a database manager."""
        self._db_manager = db_manager or get_database_manager()

    # -------------------------------------------------------------------------
    # Collection Access
    # -------------------------------------------------------------------------

    def _get_sync_collection(self) -> Collection:
        """Get synchronous collection instance."""
        return self._db_manager.get_sync_collection(self.collection_name)

    def _get_async_collection(self) -> AsyncIOMotorCollection:
        """Get asynchronous collection instance."""
        return self._db_manager.get_async_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        """Convert list of MongoDB documents to Pydantic models."""
        return [self._to_model(doc) for doc in documents if doc is not None]

    def _to_document(self, model: T) -> dict[str, Any]:
        """Convert Pydantic model to MongoDB document."""
        return model.model_dump_mongo()

    @staticmethod
    def _to_object_id(id_value: str | ObjectId) -> Optional[ObjectId]:
        """Convert string to ObjectId, None when the string is not a valid id."""
        if isinstance(id_value, ObjectId):
            return id_value
        try:
            return ObjectId(id_value)
        except (InvalidId, TypeError):
            return None

    # -------------------------------------------------------------------------
    # Synchronous CRUD Operations
    # -------------------------------------------------------------------------

    def create(self, model: T) -> T:
        """Create a new document."""
        collection = self._get_sync_collection()
        document = self._to_document(model)
        document["created_at"] = datetime.utcnow()
        document["updated_at"] = datetime.utcnow()

        result: InsertOneResult = collection.insert_one(document)
        model.id = result.inserted_id
        logger.debug(f"Created {self.collection_name} document: {result.inserted_id}")
        return model

    def get_by_id(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID."""
        object_id = self._to_object_id(id_value)
        if object_id is None:
            return None
        document = self._get_sync_collection().find_one({"_id": object_id})
        return self._to_model(document)

    def require(self, id_value: str | ObjectId) -> T:
        """Get a document by its ID, raising NotFound when it is missing."""
        model = self.get_by_id(id_value)
        if model is None:
            logger.warning(f"{self.entity_name.capitalize()} not found: {id_value}")
            raise NotFound(self.entity_name, str(id_value))
        return model

    def find(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = -1,
    ) -> list[T]:
        """Find documents matching a query."""
        collection = self._get_sync_collection()
        cursor = collection.find(query).skip(skip).limit(limit)
        cursor = cursor.sort(sort_by or "created_at", sort_order)
        return self._to_models(list(cursor))

    def update(self, id_value: str | ObjectId, update_data: dict[str, Any]) -> bool:
        """Set fields on a document by ID; True when a document was modified."""
        object_id = self._to_object_id(id_value)
        if object_id is None:
            return False

        update_data["updated_at"] = datetime.utcnow()
        result: UpdateResult = self._get_sync_collection().update_one(
            {"_id": object_id},
            {"$set": update_data},
        )
        if result.modified_count > 0:
            logger.debug(f"Updated {self.collection_name} document: {id_value}")
            return True
        return False

    def count(self, query: Optional[dict[str, Any]] = None) -> int:
        """Count documents matching a query."""
        return self._get_sync_collection().count_documents(query or {})

    # -------------------------------------------------------------------------
    # Asynchronous Operations
    # -------------------------------------------------------------------------

    async def get_by_id_async(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID asynchronously."""
        object_id = self._to_object_id(id_value)
        if object_id is None:
            return None
        document = await self._get_async_collection().find_one({"_id": object_id})
        return self._to_model(document)

    async def require_async(self, id_value: str | ObjectId) -> T:
        """Get a document by its ID asynchronously, raising NotFound when missing."""
        model = await self.get_by_id_async(id_value)
        if model is None:
            logger.warning(f"{self.entity_name.capitalize()} not found: {id_value}")
            raise NotFound(self.entity_name, str(id_value))
        return model
