"""
Smart Tourism Backend — Review Document Model
===============================================

What:  The `reviews` collection document. Many reviews per spot are allowed;
       reviews are never updated or deleted through the API.

New reviews carry a whole-star rating and a server-stamped ISO-8601 UTC
createdAt string, so sorting the stored strings sorts chronologically.
Older documents may hold fractional ratings (4.5) or a BSON date; both
still load.
"""

from datetime import datetime
from typing import Union

from pydantic import Field, field_validator

from smart_tourism.models.document import Document

MIN_RATING = 1
MAX_RATING = 5


class Review(Document):
    email_id: str = Field(..., min_length=1)
    spot_id: int
    rating: Union[int, float]
    comment: str
    created_at: Union[str, datetime]

    @field_validator("rating")
    @classmethod
    def rating_in_range(cls, v: Union[int, float]) -> Union[int, float]:
        if not MIN_RATING <= v <= MAX_RATING:
            raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
        return v
