"""
Smart Tourism Backend — User Route Handlers
=============================================

What:  POST /api/register, POST /api/login, GET /api/users/{email},
       PUT /api/users/{email}/preferences.
How:   Each handler passes the parsed body and the injected Database to
       UserService and wraps the result in the success envelope. Failures are
       raised as application exceptions and rendered by the global handlers
       as {"success": false, "message": ...}.
"""

import logging

from fastapi import APIRouter, Depends

from smart_tourism.database import Database, get_database
from smart_tourism.schemas.common import ErrorResponse
from smart_tourism.schemas.user import (
    LoginRequest,
    LoginResponse,
    PreferencesUpdateRequest,
    PreferencesUpdateResponse,
    RegisterRequest,
    RegisterResponse,
    UserDataResponse,
)
from smart_tourism.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/register",
    status_code=201,
    response_model=RegisterResponse,
    responses={
        400: {"description": "Missing fields or email already registered", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    db: Database = Depends(get_database),
) -> RegisterResponse:
    user = await user_service.register(db, payload)
    return RegisterResponse(user=user)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Email or password missing", "model": ErrorResponse},
        401: {"description": "Unknown email or wrong password", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Check a user's credentials",
)
async def login(
    payload: LoginRequest,
    db: Database = Depends(get_database),
) -> LoginResponse:
    user = await user_service.login(db, payload)
    return LoginResponse(user=user)


@router.get(
    "/users/{email}",
    response_model=UserDataResponse,
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a user's profile",
)
async def get_user(
    email: str,
    db: Database = Depends(get_database),
) -> UserDataResponse:
    user = await user_service.get_user(db, email)
    return UserDataResponse(data=user)


@router.put(
    "/users/{email}/preferences",
    response_model=PreferencesUpdateResponse,
    responses={
        400: {"description": "Preferences missing or not a list", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a user's preferences",
)
async def update_preferences(
    email: str,
    payload: PreferencesUpdateRequest,
    db: Database = Depends(get_database),
) -> PreferencesUpdateResponse:
    user = await user_service.update_preferences(db, email, payload)
    return PreferencesUpdateResponse(user=user)
