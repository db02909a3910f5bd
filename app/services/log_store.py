import logging

from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from app.config import REPORT_LIMIT
from app.errors import StorageError
from app.utils.common import serialize_doc

logger = logging.getLogger(__name__)


class LogStore:
    """Append-only хранилище логов поверх коллекции MongoDB."""

    def __init__(self, collection):
        self.collection = collection

    async def insert(self, record: dict) -> str:
        try:
            result = await self.collection.insert_one(record)
        except PyMongoError as e:
            raise StorageError(f"insert failed: {e}") from e
        return str(result.inserted_id)

    async def find_since(self, since: str, limit: int = REPORT_LIMIT) -> list[dict]:
        """Последние `limit` записей с date >= since, от новых к старым."""
        try:
            cursor = (
                self.collection.find({"date": {"$gte": since}})
                .sort("timestamp", DESCENDING)
                .limit(limit)
            )
            docs = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise StorageError(f"query since={since} failed: {e}") from e
        logger.debug("Fetched %d logs since %s", len(docs), since)
        return [serialize_doc(d) for d in docs]
