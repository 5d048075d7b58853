"""MongoDB connection (Motor) and index setup."""
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from app.config import settings

logger = logging.getLogger(__name__)

# (keys, options) per collection; every read is scoped by created_by
INDEXES = {
    "users": [
        ([("email", ASCENDING)], {"unique": True}),
    ],
    "projects": [
        ([("created_by", ASCENDING), ("created_at", DESCENDING)], {}),
    ],
    "locations": [
        ([("created_by", ASCENDING), ("created_at", DESCENDING)], {}),
    ],
    "time_logs": [
        ([("created_by", ASCENDING), ("created_at", DESCENDING)], {}),
        ([("created_by", ASCENDING), ("project_id", ASCENDING)], {}),
    ],
    "time_log_archives": [
        ([("created_by", ASCENDING), ("original_id", ASCENDING), ("created_at", DESCENDING)], {}),
    ],
}


class Database:
    """Holds the Motor client for the lifetime of the app."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        self.client = AsyncIOMotorClient(settings.mongodb_url)
        self.db = self.client[settings.mongodb_db_name]
        logger.info("Connected to MongoDB database %s", settings.mongodb_db_name)
        await ensure_indexes(self.db)

    async def disconnect(self) -> None:
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("Disconnected from MongoDB")


async def ensure_indexes(db) -> None:
    """Create the query indexes (a no-op for ones that already exist)."""
    for collection_name, indexes in INDEXES.items():
        for keys, options in indexes:
            await db[collection_name].create_index(keys, **options)
    logger.debug("Indexes ensured on %d collections", len(INDEXES))


database = Database()


async def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency returning the connected database."""
    if database.db is None:
        raise RuntimeError("Database not connected")
    return database.db
