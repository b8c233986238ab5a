"""
Smart Tourism Backend — Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── database:     Database wrapping an in-memory Mongo double
    ├── seeded_spots: Two catalog spots inserted into `database`
    ├── app:          A fresh FastAPI app whose get_database returns `database`
    └── test_client:  HTTPX AsyncClient for API endpoint testing

The in-memory double implements only the driver calls the services make
(find_one, find().sort().to_list(), insert_one, update_one with $set /
$setOnInsert / upsert, find_one_and_update, delete_one, count_documents,
create_index, command("ping")). Unique indexes are enforced, so duplicate
registrations fail the way they do against a real server.
"""

import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must be set before the first smart_tourism import builds `settings`
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["DATABASE_NAME"] = "smartTourism_test"
os.environ["BACKEND_URL"] = "https://api.test"
os.environ["IMAGES_DIR"] = "./no-such-images-dir"
os.environ["LOG_LEVEL"] = "WARNING"

from smart_tourism.database import Database, get_database  # noqa: E402
from smart_tourism.security import get_password_hash  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Mongo Double
# ══════════════════════════════════════════════════════════════════════════

def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(key in document and document[key] == value for key, value in query.items())


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    def sort(self, keys):
        # Stable sort applied from the least significant key outwards
        for field, direction in reversed(keys):
            self._documents.sort(key=lambda d: d.get(field), reverse=direction < 0)
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        documents = self._documents if length is None else self._documents[:length]
        return copy.deepcopy(documents)


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.unique_fields: List[str] = []
        self.indexes: List[Dict[str, Any]] = []

    def _check_unique(self, candidate: Dict[str, Any], ignore: Optional[Dict[str, Any]] = None):
        for field in self.unique_fields:
            for existing in self.documents:
                if existing is ignore:
                    continue
                if field in candidate and existing.get(field) == candidate[field]:
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error collection: {self.name} "
                        f"index: {field}_1 dup key",
                        code=11000,
                    )

    def _find(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for document in self.documents:
            if _matches(document, query):
                return document
        return None

    def _apply(self, document: Dict[str, Any], update: Dict[str, Any], inserting: bool):
        result = dict(document)
        result.update(copy.deepcopy(update.get("$set", {})))
        if inserting:
            result.update(copy.deepcopy(update.get("$setOnInsert", {})))
        return result

    async def create_index(self, keys, unique: bool = False, **kwargs) -> str:
        field = keys[0][0]
        self.indexes.append({"keys": keys, "unique": unique})
        if unique and field not in self.unique_fields:
            self.unique_fields.append(field)
        return f"{field}_1"

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._find(query))

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        return FakeCursor([d for d in self.documents if _matches(d, query)])

    async def insert_one(self, document: Dict[str, Any]):
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self._check_unique(stored)
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"], acknowledged=True)

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any], upsert: bool = False):
        current = self._find(query)
        if current is None:
            if not upsert:
                return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)
            seed = {k: v for k, v in query.items()}
            created = self._apply(seed, update, inserting=True)
            created.setdefault("_id", ObjectId())
            self._check_unique(created)
            self.documents.append(created)
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=created["_id"])

        updated = self._apply(current, update, inserting=False)
        self._check_unique(updated, ignore=current)
        current.clear()
        current.update(updated)
        return SimpleNamespace(matched_count=1, modified_count=1, upserted_id=None)

    async def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        return_document=ReturnDocument.BEFORE,
    ):
        current = self._find(query)
        if current is None:
            return None
        before = copy.deepcopy(current)
        current.update(self._apply(current, update, inserting=False))
        return copy.deepcopy(current) if return_document == ReturnDocument.AFTER else before

    async def delete_one(self, query: Dict[str, Any]):
        current = self._find(query)
        if current is None:
            return SimpleNamespace(deleted_count=0)
        self.documents.remove(current)
        return SimpleNamespace(deleted_count=1)

    async def count_documents(self, query: Dict[str, Any]) -> int:
        return sum(1 for d in self.documents if _matches(d, query))


class FakeMongoDatabase:
    def __init__(self, name: str):
        self.name = name
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    async def command(self, name: str):
        return {"ok": 1.0}

    async def list_collection_names(self) -> List[str]:
        return [name for name, c in self.collections.items() if c.documents or c.indexes]


class FakeMongoClient:
    def __init__(self):
        self.databases: Dict[str, FakeMongoDatabase] = {}
        self.closed = False

    def __getitem__(self, name: str) -> FakeMongoDatabase:
        if name not in self.databases:
            self.databases[name] = FakeMongoDatabase(name)
        return self.databases[name]

    async def close(self):
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database() -> Database:
    """
    Provides a Database over a fresh in-memory double, with indexes created.

    Usage:
        async def test_register(database):
            await user_service.register(database, payload)
            assert await database.users.count_documents({}) == 1
    """
    db = Database(FakeMongoClient(), "smartTourism_test")
    await db.ensure_indexes()
    return db


@pytest.fixture
def sample_spot_documents():
    return [
        {
            "spotId": 1,
            "title": "Burj Khalifa",
            "category": ["Architecture", "Landmarks"],
            "description": "World's tallest building",
            "location": {"city": "Dubai", "googleMaps": "https://maps.google.com/?q=burj"},
            "price": 150,
            "googleReviews": {"rating": 4.7, "reviewCount": 120000},
            "website": "https://www.burjkhalifa.ae",
            "image": "burj.jpg",
        },
        {
            "spotId": 2,
            "title": "Sheikh Zayed Grand Mosque",
            "category": ["Religious"],
            "location": {"city": "Abu Dhabi"},
            "price": 0,
            "image": "https://cdn.example.com/mosque.jpg",
        },
    ]


@pytest_asyncio.fixture
async def seeded_spots(database, sample_spot_documents):
    for document in sample_spot_documents:
        await database.spots.insert_one(document)
    return sample_spot_documents


@pytest_asyncio.fixture
async def registered_user(database):
    """A stored user whose password is "secret123"."""
    document = {
        "fullName": "Test User",
        "email": "test@example.com",
        "passwordHash": get_password_hash("secret123"),
        "destinationCity": "Dubai",
        "preferences": ["Religious", "Architecture"],
    }
    await database.users.insert_one(document)
    return document


@pytest.fixture
def app(database):
    """A fresh application instance whose requests use the in-memory database."""
    from smart_tourism.main import create_app

    application = create_app()
    application.dependency_overrides[get_database] = lambda: database
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app; the lifespan
    does not run, so no MongoDB server is contacted.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
