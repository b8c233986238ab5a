"""
Smart Tourism Backend — Base Document Model
=============================================

What:  Shared base class for the Pydantic models that describe stored MongoDB documents.
How:   Python attributes are snake_case; stored and serialized field names are
       camelCase (fullName, spotId, totalCost ...) through an alias generator,
       matching the documents already present in the database.
Who:   Subclassed by User, Spot, Itinerary and Review.

Validation on these models plays the role of a collection schema: a document
that does not satisfy its model is never written.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from smart_tourism.database import serialize_document

D = TypeVar("D", bound="Document")


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-15T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Document(BaseModel):
    """
    Base for stored documents.

    `id` is the string form of Mongo's `_id`. It is populated when a document
    is read back and never written (Mongo assigns `_id` on insert).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: Optional[str] = Field(default=None, description="String form of the Mongo _id")

    @classmethod
    def from_mongo(cls: Type[D], document: Dict[str, Any]) -> D:
        return cls.model_validate(serialize_document(document))

    def to_mongo(self) -> Dict[str, Any]:
        """Field dict ready for insert_one / $set, keyed by stored (camelCase) names."""
        return self.model_dump(by_alias=True, exclude={"id"})
