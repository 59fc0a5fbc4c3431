# tests/conftest.py

import os
import sys

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

# Add the project root (where `hospital_api/` lives) to PYTHONPATH
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from hospital_api.db.mongo import get_db
from hospital_api.main import app


class FakeCursor:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error

    async def to_list(self, length=None):
        if self.error:
            raise self.error
        return list(self.rows)


class FakeInsertResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeCollection:
    """Just enough of a motor collection for the routes under test."""

    def __init__(self, name):
        self.name = name
        self.docs = []
        self.aggregate_rows = []
        self.pipelines = []
        self.error = None

    def aggregate(self, pipeline):
        self.pipelines.append(pipeline)
        return FakeCursor(self.aggregate_rows, self.error)

    async def find_one(self, query, projection=None):
        if self.error:
            raise self.error
        for doc in self.docs:
            if all(doc.get(k) == v for k, v in query.items()):
                return doc
        return None

    async def insert_one(self, doc):
        if self.error:
            raise self.error
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return FakeInsertResult(doc["_id"])


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def client(fake_db):
    app.dependency_overrides[get_db] = lambda: fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mongo_db():
    """In-memory Mongo that actually evaluates aggregation pipelines."""
    return AsyncMongoMockClient()["hospital"]


@pytest.fixture
def mongo_client(mongo_db):
    app.dependency_overrides[get_db] = lambda: mongo_db
    yield TestClient(app)
    app.dependency_overrides.clear()
