"""
Database connection manager for TalentMatch.

Provides MongoDB connection management with both synchronous (PyMongo)
and asynchronous (Motor) client support. Managers are plain objects that
can be constructed per application and passed to repositories.
"""

from typing import Any, Optional
from urllib.parse import quote_plus

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from talentmatch.utils.config import DatabaseSettings, get_settings
from talentmatch.utils.logger import get_logger

logger = get_logger(__name__)

CANDIDATES_COLLECTION = "candidates"
JOBS_COLLECTION = "jobs"


class DatabaseManager:
    """
    Manages MongoDB database connections.

    Clients are created lazily and reused for the lifetime of the manager.
    """

    def __init__(self, settings: Optional[DatabaseSettings] = None) -> None:
        """Initialize database manager with settings."""
        self._settings = settings or get_settings().database
        self._db_name = self._settings.name
        self._uri = self._build_uri()
        self._sync_client: Optional[MongoClient] = None
        self._async_client: Optional[AsyncIOMotorClient] = None

    def _build_uri(self) -> str:
        """
        Build MongoDB connection URI from settings.

        Credentials are URL-encoded so special characters cannot alter the URI.
        """
        host = self._settings.host.strip()
        if not host or any(c in host for c in [";", "&", "|", "$", "`"]):
            raise ValueError(f"Invalid database host: {host}")

        auth = ""
        if self._settings.username and self._settings.password:
            encoded_user = quote_plus(self._settings.username)
            encoded_pass = quote_plus(self._settings.password)
            auth = f"{encoded_user}:{encoded_pass}@"

        return f"mongodb://{auth}{host}:{self._settings.port}"

    # -------------------------------------------------------------------------
    # Synchronous Client
    # -------------------------------------------------------------------------

    def get_sync_client(self) -> MongoClient:
        """Get or create synchronous MongoDB client."""
        if self._sync_client is None:
            logger.info("Creating synchronous MongoDB client")
            self._sync_client = MongoClient(
                self._uri,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=5000,
                maxPoolSize=50,
            )
        return self._sync_client

    def get_sync_database(self) -> Database:
        """Get synchronous database instance."""
        return self.get_sync_client()[self._db_name]

    def get_sync_collection(self, collection_name: str) -> Any:
        """Get a synchronous collection by name."""
        return self.get_sync_database()[collection_name]

    def check_sync_connection(self) -> bool:
        """Check if synchronous connection is healthy."""
        try:
            self.get_sync_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Sync connection check failed: {e}")
            self._sync_client = None
            return False

    # -------------------------------------------------------------------------
    # Asynchronous Client
    # -------------------------------------------------------------------------

    def get_async_client(self) -> AsyncIOMotorClient:
        """Get or create asynchronous MongoDB client."""
        if self._async_client is None:
            logger.info("Creating asynchronous MongoDB client")
            self._async_client = AsyncIOMotorClient(
                self._uri,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=5000,
                maxPoolSize=50,
            )
        return self._async_client

    def get_async_database(self) -> AsyncIOMotorDatabase:
        """Get asynchronous database instance."""
        return self.get_async_client()[self._db_name]

    def get_async_collection(self, collection_name: str) -> Any:
        """Get an asynchronous collection by name."""
        return self.get_async_database()[collection_name]

    # -------------------------------------------------------------------------
    # Lifecycle Management
    # -------------------------------------------------------------------------

    def close_all(self) -> None:
        """Close all database connections."""
        if self._sync_client:
            logger.info("Closing synchronous MongoDB client")
            self._sync_client.close()
            self._sync_client = None
        if self._async_client:
            logger.info("Closing asynchronous MongoDB client")
            self._async_client.close()
            self._async_client = None

    def ensure_indexes(self) -> None:
        """Create indexes for the candidate and job collections."""
        logger.info("Ensuring database indexes")

        candidates = self.get_sync_collection(CANDIDATES_COLLECTION)
        candidates.create_index([("email", ASCENDING)], unique=True, sparse=True)
        candidates.create_index("skills")
        candidates.create_index("created_at")

        jobs = self.get_sync_collection(JOBS_COLLECTION)
        jobs.create_index("status")
        jobs.create_index("company_id")
        jobs.create_index("created_at")

        logger.info("Database indexes created successfully")


# Default manager for the CLI; services take a manager explicitly
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the default database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
