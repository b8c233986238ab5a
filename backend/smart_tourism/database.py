"""
Smart Tourism Backend — Database Client Management
=====================================================

What:  Async MongoDB client wrapper, collection accessors, and FastAPI dependency.
How:   `create_database()` builds a `Database` around a `pymongo.AsyncMongoClient`.
       The application lifespan creates one instance at startup, stores it on
       `app.state.database`, and closes it on shutdown. Route handlers receive
       it through `Depends(get_database)`.
Who:   Used by services (via route handlers) and by the lifespan in main.py.

Collections:
    users        unique index on email
    spots        seeded externally, read-only through the API
    itineraries  unique index on emailId (one itinerary per user)
    reviews      index on spotId

The client connects lazily; the first operation (or `ping()`) opens the pool.
Driver retry behaviour (retryWrites) is the driver's concern, not ours.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from fastapi import Request
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.errors import PyMongoError

from smart_tourism.config import Settings, settings as default_settings
from smart_tourism.exceptions import DatabaseError

logger = logging.getLogger(__name__)

USERS = "users"
SPOTS = "spots"
ITINERARIES = "itineraries"
REVIEWS = "reviews"


class Database:
    """
    Handle on the application's MongoDB database.

    Attributes:
        client:  The async Mongo client (owns the connection pool)
        handle:  The database object selected from the client

    Each collection property returns the driver's async collection; services
    call `find_one`, `insert_one`, `update_one`, etc. on it directly.
    """

    def __init__(self, client: Any, name: str):
        self.client = client
        self.handle = client[name]

    @property
    def name(self) -> str:
        return self.handle.name

    @property
    def users(self):
        return self.handle[USERS]

    @property
    def spots(self):
        return self.handle[SPOTS]

    @property
    def itineraries(self):
        return self.handle[ITINERARIES]

    @property
    def reviews(self):
        return self.handle[REVIEWS]

    async def ping(self) -> None:
        """Round-trip to the server; raises the driver's error if unreachable."""
        await self.handle.command("ping")

    async def list_collection_names(self) -> List[str]:
        return await self.handle.list_collection_names()

    async def ensure_indexes(self) -> None:
        """
        Create the indexes the API relies on.

        users.email and itineraries.emailId are unique: a concurrent duplicate
        registration or itinerary insert is rejected by the server with
        DuplicateKeyError.
        """
        await self.users.create_index([("email", ASCENDING)], unique=True)
        await self.itineraries.create_index([("emailId", ASCENDING)], unique=True)
        await self.reviews.create_index([("spotId", ASCENDING)])
        logger.info("Indexes ensured on %s, %s, %s", USERS, ITINERARIES, REVIEWS)

    async def close(self) -> None:
        """Close all pooled connections. Called during application shutdown."""
        await self.client.close()


def create_database(config: Optional[Settings] = None) -> Database:
    """
    Build a Database from settings.

    Timeouts mirror the deployment's Atlas configuration: 30s to find a
    server, 45s per socket operation, majority write concern.
    """
    config = config or default_settings
    client = AsyncMongoClient(
        config.mongodb_uri,
        serverSelectionTimeoutMS=config.mongo_server_selection_timeout_ms,
        socketTimeoutMS=config.mongo_socket_timeout_ms,
        retryWrites=True,
        w="majority",
    )
    return Database(client, config.database_name)


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a raw Mongo document into a JSON-safe dict.

    `_id` (an ObjectId) becomes the string field `id`; the mongoose-era
    version key `__v` is dropped.
    """
    result = {k: v for k, v in document.items() if k not in ("_id", "__v")}
    if "_id" in document:
        result["id"] = str(document["_id"])
    return result


@contextmanager
def database_errors(message: str, **context: Any) -> Iterator[None]:
    """
    Translate driver failures inside the block into DatabaseError(message).

    Example:
        with database_errors("Failed to fetch user data", email=email):
            doc = await db.users.find_one({"email": email})

    Application exceptions raised inside the block pass through untouched;
    only `PyMongoError` is translated. The driver's error text goes to the
    log and to `context`, never to the client.
    """
    try:
        yield
    except PyMongoError as e:
        logger.error("%s: %s", message, e, exc_info=True)
        raise DatabaseError(
            message=message,
            context={**context, "error_type": type(e).__name__},
        ) from e


# ── Database Dependency ───────────────────────────────────────────────────
async def get_database(request: Request) -> Database:
    """
    FastAPI dependency that provides the application's Database.

    Example usage in a route:
        @router.get("/spots")
        async def list_spots(db: Database = Depends(get_database)):
            ...

    Tests replace this dependency through `app.dependency_overrides`.
    """
    return request.app.state.database
