"""Root conftest — shared test configuration.

Invariants:
    - Tests never read a developer's .env file or reach a real MongoDB
    - FakeCollection honours the same outbound interface as the pymongo
      async collection: insert_one adds _id to the dict it is given,
      find() returns a chainable cursor synchronously

Design Decisions:
    - In-memory fake over mongomock: only the handful of calls the gateway
      makes are needed, and their semantics are asserted directly in tests
"""

import logging
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from perspective.config import Settings
from perspective.models.user import User


# ─── In-memory document collection ──────────────────────────────

def _matches(document: dict, filter: dict) -> bool:
    return all(document.get(k) == v for k, v in filter.items())


def _project(document: dict, projection: dict | None) -> dict:
    if not projection:
        return dict(document)
    excluded = {k for k, v in projection.items() if not v}
    return {k: v for k, v in document.items() if k not in excluded}


class FakeCursor:
    def __init__(self, documents: list[dict]):
        self._documents = documents
        self._skip = 0
        self._limit = 0

    def sort(self, key, direction=1):
        self._documents = sorted(
            self._documents, key=lambda d: d[key], reverse=direction < 0,
        )
        return self

    def skip(self, count):
        self._skip = count
        return self

    def limit(self, count):
        self._limit = count
        return self

    async def to_list(self, length=None):
        window = self._documents[self._skip:]
        if self._limit:
            window = window[:self._limit]
        return [dict(d) for d in window]


class FakeCollection:
    """Just enough of an async Mongo collection for the users gateway."""

    def __init__(self):
        self.documents: list[dict] = []

    async def insert_one(self, document):
        if any(d["id"] == document["id"] for d in self.documents):
            raise DuplicateKeyError(f"E11000 duplicate key error: id {document['id']}")
        document["_id"] = ObjectId()
        self.documents.append(dict(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def update_one(self, filter, update):
        for document in self.documents:
            if _matches(document, filter):
                document.update(update["$set"])
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, filter):
        for i, document in enumerate(self.documents):
            if _matches(document, filter):
                del self.documents[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def find_one(self, filter, projection=None):
        for document in self.documents:
            if _matches(document, filter):
                return _project(document, projection)
        return None

    def find(self, filter, projection=None):
        return FakeCursor([
            _project(d, projection) for d in self.documents if _matches(d, filter)
        ])

    async def count_documents(self, filter):
        return sum(1 for d in self.documents if _matches(d, filter))

    async def create_index(self, keys, **kwargs):
        return f"{keys}_1"


# ─── Fixtures ────────────────────────────────────────────────────

@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def logger():
    return logging.getLogger("perspective.tests")


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def make_user():
    """Factory for fully-formed users with overridable fields."""
    def _make(**overrides) -> User:
        fields = {
            "id": "5f0c6f0e-6c2b-4e8e-9b1a-1f2d3c4b5a69",
            "name": "John Doe",
            "email": "some@email.com",
            "created_at": datetime(2024, 5, 1, 12, 30, 0, 123000, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return User(**fields)
    return _make
