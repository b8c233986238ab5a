"""
Smart Tourism Backend — Custom Exception Hierarchy
====================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by services; caught by global handlers.
When:  During request processing when an expected failure occurs.

Exception Hierarchy:
    SmartTourismError (base)
    ├── ValidationError       → 400 Bad Request (client can fix)
    ├── AuthenticationError   → 401 Unauthorized (unknown email / wrong password)
    ├── NotFoundError         → 404 Not Found
    └── DatabaseError         → 500 Internal Server Error

The `message` of every exception is safe to return to the client; `context`
is for server-side logs only.
"""

from typing import Any, Dict, Optional


class SmartTourismError(Exception):
    """
    Base exception for all Smart Tourism application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SmartTourismError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, preferences not a list, rating out of range,
             non-numeric spot id, duplicate registration.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(SmartTourismError):
    """
    Raised when login credentials do not match a registered user.

    HTTP:    401 Unauthorized
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(SmartTourismError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/users/{email} or PUT .../preferences for an unknown email.
    HTTP:    404 Not Found

    The driver returns None for missing documents; services convert that
    None into this exception.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(SmartTourismError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, server selection timeout, write error,
             or a document that fails its model's constraints on save.
    HTTP:    500 Internal Server Error

    The message is always a generic, route-specific sentence such as
    "Failed to save itinerary". Driver details go in `context` and are
    only logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
