"""
Smart Tourism Backend — User Request/Response Schemas
=======================================================

What:  API contract for registration, login, profile fetch and preferences update.

Request fields are all optional at the schema level: presence rules
("All fields are required ...") are checked by UserService so that a
missing field is answered with the route's own 400 message rather than a
generic schema error. `preferences` is accepted as any JSON value for the
same reason and must turn out to be a list.

The password, plain or hashed, never appears in a response schema.
"""

from typing import Any, List, Optional

from pydantic import Field

from smart_tourism.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(CamelModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    destination_city: Optional[str] = None
    preferences: Optional[Any] = Field(default=None, description="List of preferred categories")


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PreferencesUpdateRequest(CamelModel):
    preferences: Optional[Any] = Field(default=None, description="Replacement list of categories")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserProfile(CamelModel):
    """Safe projection of a user: everything except the password hash."""
    email: str
    full_name: str
    destination_city: str
    preferences: List[str]


class LoginUser(CamelModel):
    """Projection returned on login; the client stores the email as its identity."""
    email: str
    full_name: str
    preferences: List[str]


class RegisterResponse(CamelModel):
    success: bool = True
    message: str = "User registered successfully"
    user: UserProfile


class LoginResponse(CamelModel):
    success: bool = True
    message: str = "Login successful"
    user: LoginUser


class UserDataResponse(CamelModel):
    success: bool = True
    data: UserProfile


class PreferencesUpdateResponse(CamelModel):
    success: bool = True
    message: str = "Preferences updated successfully"
    user: UserProfile
