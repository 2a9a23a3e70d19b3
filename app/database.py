"""MongoDB database connection using Motor (async driver)."""
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from app.config import Settings

logger = logging.getLogger(__name__)

ACTIVE_ENTRY_INDEX = "one_active_entry_per_user"


class Database:
    """MongoDB database connection manager."""

    def __init__(self, settings: Settings):
        """Initialize manager; no connection is made until connect()."""
        self.settings = settings
        self.client: AsyncIOMotorClient | None = None
        self.db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB and make sure indexes exist."""
        self.client = AsyncIOMotorClient(self.settings.mongodb_url, tz_aware=True)
        self.db = self.client[self.settings.mongodb_db_name]
        logger.info("Connected to MongoDB: %s", self.settings.mongodb_db_name)
        await self.ensure_indexes()

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("Disconnected from MongoDB")

    async def ensure_indexes(self) -> None:
        """
        Create the indexes the time tracking queries rely on.

        The partial unique index on active entries is what keeps a user
        from holding two running timers when two starts race.
        """
        db = self.get_db()
        time_entries = db["time_entries"]
        await time_entries.create_index(
            [("user_id", ASCENDING)],
            name=ACTIVE_ENTRY_INDEX,
            unique=True,
            partialFilterExpression={"is_active": True},
        )
        await time_entries.create_index(
            [("user_id", ASCENDING), ("start_time", DESCENDING)],
            name="user_recent_entries",
        )
        await db["projects"].create_index(
            [("user_id", ASCENDING)],
            name="user_projects",
        )

    def get_db(self) -> AsyncIOMotorDatabase:
        """Get the connected database."""
        if self.db is None:
            raise RuntimeError("Database not connected")
        return self.db
