"""
Smart Tourism Backend — Itinerary Route Handlers
==================================================

What:  POST /api/itineraries (create or replace) and GET /api/itineraries/{emailId}.

The save body is taken as a raw JSON object; its shape is checked against the
Itinerary document model inside the service, and a body that fails that check
is a failed save (500), not a 400.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from smart_tourism.database import Database, get_database
from smart_tourism.schemas.common import ErrorResponse
from smart_tourism.schemas.itinerary import ItineraryResponse, ItinerarySaveResponse
from smart_tourism.services.itinerary_service import itinerary_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Itineraries"])


@router.post(
    "/itineraries",
    response_model=ItinerarySaveResponse,
    responses={500: {"description": "Itinerary could not be saved", "model": ErrorResponse}},
    summary="Save a user's itinerary",
    description=(
        "Creates the user's itinerary on first save; afterwards replaces its spots, "
        "totalCost and updatedAt. The whole spots array is sent every time."
    ),
)
async def save_itinerary(
    payload: Dict[str, Any] = Body(...),
    db: Database = Depends(get_database),
) -> ItinerarySaveResponse:
    await itinerary_service.save_itinerary(db, payload)
    return ItinerarySaveResponse()


@router.get(
    "/itineraries/{email_id}",
    response_model=ItineraryResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Get a user's itinerary",
    description="A user without an itinerary gets {spots: [], totalCost: 0}, not a 404.",
)
async def get_itinerary(
    email_id: str,
    db: Database = Depends(get_database),
) -> ItineraryResponse:
    logger.info("Fetching itinerary for email: %s", email_id)
    itinerary = await itinerary_service.get_itinerary(db, email_id)
    return ItineraryResponse(data=itinerary)
