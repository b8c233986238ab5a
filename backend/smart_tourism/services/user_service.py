"""
Smart Tourism Backend — User Service
======================================

What:  Registration, login, profile fetch and preferences update.
Who:   Called by the route handlers in routes/users.py.

Email normalization:
    Every lookup and every write goes through `normalize_email()` (strip +
    lower case), so an address registered as "Test@Example.com" can log in,
    be fetched and be updated with any casing.

Passwords:
    Stored as Argon2 hashes. Hashing and verification are CPU-bound, so they
    run in Starlette's threadpool instead of on the event loop.
"""

import logging
from typing import Any, Dict, List

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
from starlette.concurrency import run_in_threadpool

from smart_tourism.database import Database, database_errors
from smart_tourism.exceptions import AuthenticationError, NotFoundError, ValidationError
from smart_tourism.models.user import User, normalize_email
from smart_tourism.schemas.user import (
    LoginRequest,
    LoginUser,
    PreferencesUpdateRequest,
    RegisterRequest,
    UserProfile,
)
from smart_tourism.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)

REGISTER_FIELDS_MESSAGE = "All fields are required and preferences must be an array"
EMAIL_TAKEN_MESSAGE = "Email already registered"
LOGIN_FIELDS_MESSAGE = "Email and password are required"
EMAIL_NOT_REGISTERED_MESSAGE = "The Email you have entered is Not Registered, Please Sign Up"
INCORRECT_PASSWORD_MESSAGE = "The Password you have entered is Incorrect"
INVALID_PREFERENCES_MESSAGE = "Invalid preferences data"


def _profile(document: Dict[str, Any]) -> UserProfile:
    return UserProfile(
        email=document["email"],
        full_name=document["fullName"],
        destination_city=document["destinationCity"],
        preferences=document.get("preferences", []),
    )


def _as_preferences(value: Any) -> List[str]:
    # Non-string tags are stored as their string form
    return [str(item) for item in value]


class UserService:
    """
    Business logic for the `users` collection.

    Error Handling Strategy:
        Input problems raise ValidationError (400), credential problems
        AuthenticationError (401), unknown users NotFoundError (404). Driver
        failures are wrapped in DatabaseError (500) with a route-specific
        message by `database_errors`.
    """

    async def register(self, db: Database, payload: RegisterRequest) -> UserProfile:
        """
        Create a user account.

        Steps:
            1. Every field present and non-empty, preferences a list
            2. Reject an email that is already registered
            3. Hash the password and insert the user

        A registration racing another for the same email is stopped by the
        unique index on users.email and reported as the same 400.
        """
        required = (
            payload.full_name,
            payload.email,
            payload.password,
            payload.destination_city,
        )
        if not all(required) or not isinstance(payload.preferences, list):
            raise ValidationError(message=REGISTER_FIELDS_MESSAGE)

        email = normalize_email(payload.email)

        with database_errors("Registration failed", email=email):
            existing = await db.users.find_one({"email": email})
            if existing:
                raise ValidationError(message=EMAIL_TAKEN_MESSAGE, field="email")

            user = User(
                full_name=payload.full_name,
                email=email,
                password_hash=await run_in_threadpool(get_password_hash, payload.password),
                destination_city=payload.destination_city,
                preferences=_as_preferences(payload.preferences),
            )
            try:
                await db.users.insert_one(user.to_mongo())
            except DuplicateKeyError:
                raise ValidationError(message=EMAIL_TAKEN_MESSAGE, field="email")

        logger.info("User registered: %s", email)
        return UserProfile(
            email=user.email,
            full_name=user.full_name,
            destination_city=user.destination_city,
            preferences=user.preferences,
        )

    async def login(self, db: Database, payload: LoginRequest) -> LoginUser:
        """
        Check credentials. No session or token is issued; the client keeps
        the returned email as the signed-in identity.
        """
        if not payload.email or not payload.password:
            raise ValidationError(message=LOGIN_FIELDS_MESSAGE)

        email = normalize_email(payload.email)
        logger.info("Login attempt for email: %s", email)

        with database_errors("An error occurred during login", email=email):
            document = await db.users.find_one({"email": email})

        if document is None:
            raise AuthenticationError(message=EMAIL_NOT_REGISTERED_MESSAGE)

        password_ok = await run_in_threadpool(
            verify_password, payload.password, document.get("passwordHash", "")
        )
        if not password_ok:
            raise AuthenticationError(message=INCORRECT_PASSWORD_MESSAGE)

        return LoginUser(
            email=document["email"],
            full_name=document["fullName"],
            preferences=document.get("preferences", []),
        )

    async def get_user(self, db: Database, email: str) -> UserProfile:
        email = normalize_email(email)
        with database_errors("Failed to fetch user data", email=email):
            document = await db.users.find_one({"email": email})
        if document is None:
            raise NotFoundError(resource="User", resource_id=email)
        return _profile(document)

    async def update_preferences(
        self, db: Database, email: str, payload: PreferencesUpdateRequest
    ) -> UserProfile:
        """Replace the user's preferences list and return the updated profile."""
        if not isinstance(payload.preferences, list):
            raise ValidationError(message=INVALID_PREFERENCES_MESSAGE, field="preferences")

        email = normalize_email(email)
        preferences = _as_preferences(payload.preferences)
        logger.info("Updating preferences for user: %s", email)

        with database_errors("Failed to update preferences", email=email):
            document = await db.users.find_one_and_update(
                {"email": email},
                {"$set": {"preferences": preferences}},
                return_document=ReturnDocument.AFTER,
            )

        if document is None:
            raise NotFoundError(resource="User", resource_id=email)

        logger.info("Preferences updated successfully for user: %s", email)
        return _profile(document)


user_service = UserService()
