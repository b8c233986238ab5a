"""
Smart Tourism Backend — Review Service
========================================

What:  Review submission (with its itinerary side effect) and per-spot listing.
Who:   Called by POST /api/reviews and GET /api/reviews/{spotId}.

Submission Flow:
    ┌──────────┐    ┌──────────────┐    ┌──────────────────────────────┐
    │ Validate │───▶│ Insert review│───▶│ Drop spot from the reviewer's│
    │  fields  │    │  (reviews)   │    │ itinerary, recompute total   │
    └──────────┘    └──────────────┘    └──────────────────────────────┘
                           ▲                          │ fails
                           └──── delete review ◀──────┘

    The two writes touch different collections and are not wrapped in a
    transaction. If the itinerary write fails, the inserted review is
    deleted again and the request fails with 500, so a review never exists
    while the reviewed spot is still planned.
"""

import logging
from typing import List, Tuple

from pydantic import ValidationError as SchemaValidationError
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from smart_tourism.database import Database, database_errors
from smart_tourism.exceptions import DatabaseError, ValidationError
from smart_tourism.models.document import utc_now_iso
from smart_tourism.models.itinerary import remove_spot
from smart_tourism.models.review import MAX_RATING, MIN_RATING, Review
from smart_tourism.schemas.review import ReviewCreateRequest

logger = logging.getLogger(__name__)

REVIEW_FIELDS_MESSAGE = "All fields are required"
RATING_RANGE_MESSAGE = f"Rating must be between {MIN_RATING} and {MAX_RATING}"
INVALID_SPOT_ID_MESSAGE = "Invalid spot ID"
SUBMIT_FAILED_MESSAGE = "Failed to submit review"

# Query value -> stored field; "date" is the name the web client sends
SORT_FIELDS = {"createdAt": "createdAt", "date": "createdAt", "rating": "rating"}
SORT_ORDERS = {"asc": ASCENDING, "desc": DESCENDING}


def parse_spot_id(raw: str) -> int:
    """Path segment → integer spot id; anything non-numeric is a 400."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(message=INVALID_SPOT_ID_MESSAGE, field="spotId")


def resolve_sort(sort_by: str, order: str) -> List[Tuple[str, int]]:
    """
    Map the sortBy / order query values to a Mongo sort spec.

    Unrecognised values fall back to createdAt / desc. Rating ties are
    broken by newest first.
    """
    field = SORT_FIELDS.get(sort_by, "createdAt")
    direction = SORT_ORDERS.get(order, DESCENDING)
    sort = [(field, direction)]
    if field != "createdAt":
        sort.append(("createdAt", DESCENDING))
    return sort


class ReviewService:

    async def submit_review(self, db: Database, payload: ReviewCreateRequest) -> Review:
        """
        Store a review and remove the reviewed spot from the reviewer's itinerary.

        Raises:
            ValidationError: a field is missing, or rating is outside 1..5
            DatabaseError: the insert failed, or the itinerary update failed
                           (in which case the review has been rolled back)
        """
        fields = {
            "emailId": payload.email_id,
            "spotId": payload.spot_id,
            "rating": payload.rating,
            "comment": payload.comment,
        }
        missing = [name for name, value in fields.items() if value is None or value == ""]
        if missing:
            raise ValidationError(message=REVIEW_FIELDS_MESSAGE, context={"missing": missing})

        if not MIN_RATING <= payload.rating <= MAX_RATING:
            raise ValidationError(message=RATING_RANGE_MESSAGE, field="rating")

        review = Review(
            email_id=payload.email_id,
            spot_id=payload.spot_id,
            rating=payload.rating,
            comment=payload.comment,
            created_at=utc_now_iso(),
        )

        with database_errors(SUBMIT_FAILED_MESSAGE, email_id=review.email_id):
            result = await db.reviews.insert_one(review.to_mongo())
        review.id = str(result.inserted_id)

        try:
            await self._remove_from_itinerary(db, review.email_id, review.spot_id)
        except Exception as e:
            logger.error(
                "Itinerary update failed after review %s; removing the review: %s",
                review.id, e, exc_info=True,
            )
            await self._discard_review(db, result.inserted_id)
            raise DatabaseError(
                message=SUBMIT_FAILED_MESSAGE,
                context={"review_id": review.id, "error_type": type(e).__name__},
            ) from e

        logger.info("Review %s stored for spot %d by %s", review.id, review.spot_id, review.email_id)
        return review

    async def _remove_from_itinerary(self, db: Database, email_id: str, spot_id: int) -> None:
        itinerary = await db.itineraries.find_one({"emailId": email_id})
        if itinerary is None:
            return

        remaining, total_cost = remove_spot(itinerary.get("spots", []), spot_id)
        await db.itineraries.update_one(
            {"_id": itinerary["_id"]},
            {"$set": {"spots": remaining, "totalCost": total_cost, "updatedAt": utc_now_iso()}},
        )

    async def _discard_review(self, db: Database, review_id) -> None:
        try:
            await db.reviews.delete_one({"_id": review_id})
        except PyMongoError as e:
            # Review stays stored; the itinerary still lists the spot
            logger.error("Could not remove review %s: %s", review_id, e)

    async def list_reviews(
        self,
        db: Database,
        spot_id: str,
        sort_by: str = "createdAt",
        order: str = "desc",
    ) -> List[Review]:
        """
        Reviews for one spot, ordered by `resolve_sort(sort_by, order)`.

        A stored review that no longer fits the Review model is logged and
        left out instead of failing the whole list.
        """
        spot = parse_spot_id(spot_id)
        sort = resolve_sort(sort_by, order)

        with database_errors("Failed to fetch reviews", spot_id=spot):
            documents = await db.reviews.find({"spotId": spot}).sort(sort).to_list(length=None)

        reviews = []
        for document in documents:
            try:
                reviews.append(Review.from_mongo(document))
            except SchemaValidationError as e:
                logger.warning(
                    "Skipping review %s for spot %d: %d schema error(s)",
                    document.get("_id"), spot, e.error_count(),
                )
        return reviews


review_service = ReviewService()
