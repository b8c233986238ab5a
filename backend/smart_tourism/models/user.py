"""
Smart Tourism Backend — User Document Model
=============================================

What:  The `users` collection document.
Who:   Written at registration, read at login and profile fetch, mutated by
       the preferences update.

Stored shape:
    {
        "fullName": "Test User",
        "email": "test@example.com",          # unique index, always lower case
        "passwordHash": "$argon2id$v=19$...",  # never returned by the API
        "destinationCity": "Dubai",
        "preferences": ["Religious", "Architecture"]
    }
"""

from typing import List

from pydantic import Field, field_validator

from smart_tourism.models.document import Document


def normalize_email(email: str) -> str:
    """The single normalization rule for every email lookup and write."""
    return email.strip().lower()


class User(Document):
    full_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password_hash: str = Field(..., min_length=1, description="Argon2 hash of the password")
    destination_city: str = Field(..., min_length=1)
    preferences: List[str] = Field(default_factory=list, description="Preferred spot categories")

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return normalize_email(v)
