"""
Smart Tourism Backend — Spot Document Model
=============================================

What:  The `spots` collection document (a tourist point of interest).
Who:   Read by GET /api/spots. Spots are seeded outside this API and are
       never created, updated or deleted here.

The catalog is seeded by hand and is returned as stored, apart from
`_id` → `id` and the image URL. Fields are therefore typed loosely: a price
of "Free", a BSON date in createdAt or a nested object with extra keys is
passed through rather than rejected. Unknown fields are kept.

Typical stored shape:
    {
        "spotId": 1,
        "title": "Burj Khalifa",
        "category": ["Architecture"],
        "location": {"city": "Dubai", "googleMaps": "https://maps.google.com/..."},
        "price": 150,
        "googleReviews": {"rating": 4.7, "reviewCount": 120000},
        "image": "burj.jpg"
    }
"""

from typing import Any, Optional

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from smart_tourism.models.document import Document


class Spot(Document):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    spot_id: Optional[Any] = None
    title: Optional[Any] = None
    category: Optional[Any] = None
    description: Optional[Any] = None
    location: Optional[Any] = Field(default=None, description="{city, googleMaps}")
    price: Optional[Any] = None
    google_reviews: Optional[Any] = Field(default=None, description="{rating, reviewCount}")
    website: Optional[Any] = None
    image: Optional[Any] = Field(default=None, description="Absolute image URL")
    created_at: Optional[Any] = None
    updated_at: Optional[Any] = None
