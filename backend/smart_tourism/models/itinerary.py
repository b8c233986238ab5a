"""
Smart Tourism Backend — Itinerary Document Model
==================================================

What:  The `itineraries` collection document: one user's planned spots.
Who:   Upserted by POST /api/itineraries, read by GET /api/itineraries/{emailId},
       trimmed by review submission.

Invariants:
    - emailId is unique (one itinerary per user, enforced by a unique index)
    - a save replaces `spots` wholesale; there is no incremental append
    - totalCost is client-supplied on save, recomputed server-side when a
      reviewed spot is removed
"""

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from smart_tourism.models.document import Document


class ItinerarySpot(BaseModel):
    """One planned visit. `status` is free text: pending, booked, completed ..."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    spot_id: int
    title: str
    price: float
    date: str
    status: str


class Itinerary(Document):
    email_id: str = Field(..., min_length=1)
    spots: List[ItinerarySpot] = Field(default_factory=list)
    total_cost: float
    created_at: str = Field(..., min_length=1)
    updated_at: str = Field(..., min_length=1)


class EmptyItinerary(BaseModel):
    """Returned in place of an itinerary for a user who has never saved one."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    spots: List[ItinerarySpot] = Field(default_factory=list)
    total_cost: float = 0


def remove_spot(spots: List[Dict[str, Any]], spot_id: int) -> Tuple[List[Dict[str, Any]], float]:
    """
    Drop every entry for `spot_id` from a stored spots array.

    Returns the remaining entries and their summed price (the new totalCost).
    An entry with a missing or null price counts as 0.
    Operates on raw stored dicts so unrecognised subdocument fields survive.
    """
    remaining = [spot for spot in spots if spot.get("spotId") != spot_id]
    total_cost = sum(spot.get("price") or 0 for spot in remaining)
    return remaining, total_cost
