"""Общие фикстуры: in-memory коллекция вместо MongoDB и TestClient."""

import os
from datetime import datetime, timedelta, timezone

os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app import config
from app.database import get_log_store
from app.main import create_app
from app.services.log_store import LogStore

ADMIN_KEY = "test-admin-key"


class InsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


def _naive_utc(value):
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, key, direction):
        self.docs = sorted(self.docs, key=lambda d: _naive_utc(d[key]), reverse=direction < 0)
        return self

    def limit(self, n):
        self.docs = self.docs[:n]
        return self

    async def to_list(self, length=None):
        # как pymongo без tz_aware: datetime возвращается наивным в UTC
        docs = [{k: _naive_utc(v) for k, v in d.items()} for d in self.docs]
        return docs if length is None else docs[:length]


class FakeCollection:
    """Подмножество API motor-коллекции, которое использует LogStore."""

    def __init__(self):
        self.docs = []
        self.find_calls = 0

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(dict(doc))
        return InsertResult(doc["_id"])

    def find(self, query):
        self.find_calls += 1
        since = query["date"]["$gte"]
        return FakeCursor([d for d in self.docs if d["date"] >= since])


class FailingCollection(FakeCollection):
    async def insert_one(self, doc):
        raise ServerSelectionTimeoutError("no servers available")

    def find(self, query):
        self.find_calls += 1
        raise ServerSelectionTimeoutError("no servers available")


def make_log(uid, action, date="2025-10-06", ts=None, details=None):
    return {
        "_id": ObjectId(),
        "uid": uid,
        "action": action,
        "details": details or {},
        "date": date,
        "timestamp": ts or datetime(2025, 10, 6, 12, 0, 0),
    }


def seed(collection, entries, start=datetime(2025, 10, 6, 12, 0, 0)):
    """Кладёт записи так, что первая в списке получается самой новой."""
    for i, (uid, action) in enumerate(entries):
        collection.docs.append(make_log(uid, action, ts=start - timedelta(minutes=i)))


@pytest.fixture(autouse=True)
def admin_key(monkeypatch):
    monkeypatch.setattr(config, "ADMIN_API_KEY", ADMIN_KEY)
    return ADMIN_KEY


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def store(collection):
    return LogStore(collection)


def _client_for(collection):
    app = create_app()
    app.dependency_overrides[get_log_store] = lambda: LogStore(collection)
    # без `with`: lifespan (подключение к MongoDB) в тестах не запускается
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def client(collection):
    return _client_for(collection)


@pytest.fixture
def failing_collection():
    return FailingCollection()


@pytest.fixture
def failing_client(failing_collection):
    return _client_for(failing_collection)
