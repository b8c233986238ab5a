"""
Smart Tourism Backend — Spot Service
======================================

What:  Reads the spot catalog and reports database diagnostics.
Who:   Called by GET /api/spots and GET /api/test.

The catalog is returned unfiltered: registration collects a destination
city and preferences, but no recommendation step uses them.
"""

import logging
from typing import Any, List

from smart_tourism.config import settings
from smart_tourism.database import Database, database_errors
from smart_tourism.models.spot import Spot
from smart_tourism.schemas.common import DiagnosticsData

logger = logging.getLogger(__name__)


def resolve_image_url(image: Any, backend_url: str) -> Any:
    """
    Turn a stored image reference into a URL the browser can load.

        None / ""                  → None
        non-string values          → unchanged
        "https://cdn/x.jpg"        → unchanged
        "burj.jpg"                 → "{backend_url}/images/burj.jpg"
    """
    if not image:
        return None
    if not isinstance(image, str) or image.startswith("http"):
        return image
    return f"{backend_url}/images/{image}"


class SpotService:

    async def list_spots(self, db: Database) -> List[Spot]:
        with database_errors("Failed to retrieve spots"):
            documents = await db.spots.find({}).to_list(length=None)

        spots = []
        for document in documents:
            spot = Spot.from_mongo(document)
            spot.image = resolve_image_url(spot.image, settings.backend_url)
            spots.append(spot)

        logger.info("Found spots: %d", len(spots))
        return spots

    async def diagnostics(self, db: Database) -> DiagnosticsData:
        """Ping the server, then list collections and count spots."""
        with database_errors("Database connection test failed"):
            await db.ping()
            collections = await db.list_collection_names()
            spot_count = await db.spots.count_documents({})

        return DiagnosticsData(
            collections=sorted(collections),
            spot_count=spot_count,
            db_name=db.name,
            connection_state=1,
        )


spot_service = SpotService()
