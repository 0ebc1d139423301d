"""
MongoDB Connection Pool - Singleton pattern for connection reuse.
"""
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from typing import Optional

from shared.exceptions import NotConnectedError
from shared.services.logger import get_logger


logger = get_logger(__name__)


class MongoDBPool:
    """Singleton MongoDB connection pool."""

    _instance: Optional["MongoDBPool"] = None
    _client: Optional[MongoClient] = None

    def __new__(cls) -> "MongoDBPool":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def connect(self, uri: Optional[str] = None) -> MongoClient:
        """
        Initialize or return existing MongoDB client.
        Uses connection pooling by default (maxPoolSize=100).
        """
        if self._client is None:
            client = MongoClient(
                uri,
                maxPoolSize=100,
                minPoolSize=10,
                maxIdleTimeMS=30000,
                connectTimeoutMS=5000,
                serverSelectionTimeoutMS=5000,
            )
            # Test connection before publishing the client
            client.admin.command("ping")
            self._client = client
        return self._client

    def get_database(self, db_name: str) -> Database:
        """Get database instance."""
        return self.client[db_name]

    def get_collection(self, collection_name: str, db_name: str) -> Collection:
        """Get collection from database."""
        db = self.get_database(db_name)
        return db[collection_name]

    def close(self) -> None:
        """Close MongoDB connection."""
        if self._client:
            self._client.close()
            self._client = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> MongoClient:
        """Get raw client. Raises NotConnectedError before connect()."""
        if self._client is None:
            raise NotConnectedError()
        return self._client


# Global singleton instance
mongo_pool = MongoDBPool()


def ensure_indexes(users: Collection) -> None:
    """Create the indexes the services rely on (one user per normalized email)."""
    name = users.create_index([("email", ASCENDING)], unique=True, name="email_unique")
    logger.info(f"Index ready: {users.name}.{name}")


def get_mongo_client() -> MongoClient:
    """FastAPI dependency: get MongoDB client."""
    return mongo_pool.client


def get_database(db_name: str) -> Database:
    """FastAPI dependency: get database."""
    return mongo_pool.get_database(db_name)
