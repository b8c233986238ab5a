"""
Smart Tourism Backend — Shared Response Schemas
=================================================

What:  Envelope, diagnostics and health models shared by several routes.
How:   Attributes are snake_case; JSON keys are camelCase through the alias
       generator, matching what the web client already reads.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for API schemas whose JSON keys are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusEnvelope(BaseModel, Generic[T]):
    """
    What:  The generic status envelope used by GET /api/spots and GET /api/test.

    Example:
        {
            "status": 200,
            "message": "Spots retrieved successfully",
            "data": [...],
            "timestamp": "2024-01-15T12:00:00.000Z"
        }
    """
    status: int = Field(description="HTTP status code, repeated in the body")
    message: str = Field(description="Human-readable outcome")
    data: Optional[T] = Field(default=None, description="Payload; null on error")
    timestamp: str = Field(description="ISO-8601 UTC time the response was built")


class DiagnosticsData(CamelModel):
    """Payload of GET /api/test: what the backend can see of its database."""
    collections: List[str] = Field(description="Collection names in the database")
    spot_count: int = Field(description="Number of documents in the spots collection")
    db_name: str = Field(description="Name of the connected database")
    connection_state: int = Field(description="1 when the server answered a ping")


class ErrorResponse(BaseModel):
    """
    What:  Error body of every success-envelope route.

    Example:
        {"success": false, "message": "Email already registered"}
    """
    success: bool = Field(default=False)
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
