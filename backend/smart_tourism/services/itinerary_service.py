"""
Smart Tourism Backend — Itinerary Service
===========================================

What:  Saves (upserts) and fetches the single itinerary each user owns.
Who:   Called by POST /api/itineraries and GET /api/itineraries/{emailId}.

Save semantics:
    One `update_one(..., upsert=True)` keyed by emailId:
        $set          spots, totalCost, updatedAt   (every save)
        $setOnInsert  emailId, createdAt            (first save only)
    A later save replaces the spots array wholesale. Two concurrent saves
    for the same user are last-write-wins; no version field is consulted.
"""

import logging
from typing import Any, Union

from pydantic import ValidationError as SchemaValidationError

from smart_tourism.database import Database, database_errors
from smart_tourism.exceptions import DatabaseError
from smart_tourism.models.itinerary import EmptyItinerary, Itinerary

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save itinerary"


class ItineraryService:

    async def save_itinerary(self, db: Database, payload: Any) -> Itinerary:
        """
        Validate the raw body against the Itinerary document model and upsert it.

        A body that does not satisfy the model is a failed save (500 with
        "Failed to save itinerary"), the same outcome as a write the
        database itself refuses.
        """
        try:
            itinerary = Itinerary.model_validate(payload)
        except SchemaValidationError as e:
            logger.warning("Rejected itinerary document: %d schema error(s)", e.error_count())
            raise DatabaseError(
                message=SAVE_FAILED_MESSAGE,
                context={"schema_errors": e.error_count()},
            )

        document = itinerary.to_mongo()
        with database_errors(SAVE_FAILED_MESSAGE, email_id=itinerary.email_id):
            result = await db.itineraries.update_one(
                {"emailId": itinerary.email_id},
                {
                    "$set": {
                        "spots": document["spots"],
                        "totalCost": document["totalCost"],
                        "updatedAt": document["updatedAt"],
                    },
                    "$setOnInsert": {
                        "emailId": document["emailId"],
                        "createdAt": document["createdAt"],
                    },
                },
                upsert=True,
            )

        if result.upserted_id is not None:
            logger.info("Itinerary created for %s", itinerary.email_id)
        else:
            logger.info("Itinerary replaced for %s", itinerary.email_id)
        return itinerary

    async def get_itinerary(
        self, db: Database, email_id: str
    ) -> Union[Itinerary, EmptyItinerary]:
        """The user's itinerary, or an empty one if they have never saved."""
        with database_errors("Failed to fetch itinerary", email_id=email_id):
            document = await db.itineraries.find_one({"emailId": email_id})

        if document is None:
            logger.info("No itinerary found for email: %s", email_id)
            return EmptyItinerary()
        return Itinerary.from_mongo(document)


itinerary_service = ItineraryService()
