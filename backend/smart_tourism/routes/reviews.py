"""
Smart Tourism Backend — Review Route Handlers
===============================================

What:  POST /api/reviews and GET /api/reviews/{spotId}.

`sortBy` (createdAt, date, rating) and `order` (asc, desc) are read leniently:
an unrecognised value falls back to newest first rather than failing.

spotId is declared as a string path segment and parsed by the service, so a
non-numeric id is answered with the route's own 400 ("Invalid spot ID").
"""

import logging

from fastapi import APIRouter, Depends, Query

from smart_tourism.database import Database, get_database
from smart_tourism.schemas.common import ErrorResponse
from smart_tourism.schemas.review import (
    ReviewCreateRequest,
    ReviewCreateResponse,
    ReviewListResponse,
)
from smart_tourism.services.review_service import review_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Reviews"])


@router.post(
    "/reviews",
    status_code=201,
    response_model=ReviewCreateResponse,
    responses={
        400: {"description": "Missing fields or rating outside 1-5", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Submit a review",
    description="Stores the review and removes the spot from the reviewer's itinerary.",
)
async def submit_review(
    payload: ReviewCreateRequest,
    db: Database = Depends(get_database),
) -> ReviewCreateResponse:
    review = await review_service.submit_review(db, payload)
    return ReviewCreateResponse(review=review)


@router.get(
    "/reviews/{spot_id}",
    response_model=ReviewListResponse,
    responses={
        400: {"description": "Non-numeric spot id", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the reviews of a spot",
)
async def list_reviews(
    spot_id: str,
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    order: str = Query(default="desc"),
    db: Database = Depends(get_database),
) -> ReviewListResponse:
    reviews = await review_service.list_reviews(db, spot_id, sort_by=sort_by, order=order)
    return ReviewListResponse(reviews=reviews)
