"""
Smart Tourism Backend — Review Request/Response Schemas
=========================================================
"""

from typing import List, Optional

from pydantic import Field

from smart_tourism.models.review import Review
from smart_tourism.schemas.common import CamelModel


class ReviewCreateRequest(CamelModel):
    email_id: Optional[str] = None
    spot_id: Optional[int] = None
    rating: Optional[int] = Field(default=None, description="Whole stars, 1 to 5")
    comment: Optional[str] = None


class ReviewCreateResponse(CamelModel):
    success: bool = True
    message: str = "Review submitted successfully and spot removed from itinerary"
    review: Review


class ReviewListResponse(CamelModel):
    success: bool = True
    reviews: List[Review]
