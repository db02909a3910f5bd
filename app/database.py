import logging

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from app import config
from app.errors import StorageError
from app.services.log_store import LogStore

logger = logging.getLogger(__name__)

LOGS_COLLECTION = "logs"


class Database:
    """Держит клиент MongoDB; открывается в lifespan и закрывается при остановке."""

    def __init__(self, uri: str = config.MONGODB_URI, name: str = config.MONGODB_DB,
                 timeout_ms: int = config.MONGODB_TIMEOUT_MS):
        self.uri = uri
        self.name = name
        self.timeout_ms = timeout_ms
        self.client: AsyncIOMotorClient | None = None
        self.db = None

    async def connect(self):
        try:
            # tz_aware: даты из Mongo приходят в UTC с tzinfo, в JSON уходят с offset
            self.client = AsyncIOMotorClient(self.uri, serverSelectionTimeoutMS=self.timeout_ms, tz_aware=True)
            self.db = self.client.get_default_database(default=self.name)
            await self.client.admin.command("ping")
            logger.info("MongoDB connected (db=%s)", self.db.name)
        except (PyMongoError, ValueError) as e:
            # сервер продолжает работать, ошибки всплывут на запросах
            logger.error("MongoDB connection error: %s", e)
        return self

    async def ensure_indexes(self):
        if self.db is None:
            return
        try:
            await self.db[LOGS_COLLECTION].create_index([("date", ASCENDING)])
            await self.db[LOGS_COLLECTION].create_index([("timestamp", DESCENDING)])
        except PyMongoError as e:
            logger.warning("Could not create indexes: %s", e)

    def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None
            self.db = None

    @property
    def logs(self):
        if self.db is None:
            raise StorageError("database is not connected")
        return self.db[LOGS_COLLECTION]


def get_log_store(request: Request) -> LogStore:
    database: Database = request.app.state.database
    return LogStore(database.logs)
