"""
Smart Tourism Backend — Itinerary Response Schemas
====================================================

The save request body is not modelled here: POST /api/itineraries takes the
raw JSON object and ItineraryService validates it against the stored
document model, the same check a collection schema applies on write.
"""

from typing import Union

from smart_tourism.models.itinerary import EmptyItinerary, Itinerary
from smart_tourism.schemas.common import CamelModel


class ItinerarySaveResponse(CamelModel):
    success: bool = True
    message: str = "Itinerary saved successfully"


class ItineraryResponse(CamelModel):
    """`data` is the stored itinerary, or {spots: [], totalCost: 0} when none exists."""
    success: bool = True
    data: Union[Itinerary, EmptyItinerary]
