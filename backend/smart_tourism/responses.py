"""
Smart Tourism Backend — Response Envelopes
============================================

What:  Builds the two JSON envelopes the API answers with.
Who:   Route handlers (success bodies) and the global exception handlers
       in main.py (error bodies).

Envelopes:
    Status envelope (GET /api/spots, GET /api/test):
        {"status": 200, "message": "...", "data": ..., "timestamp": "2024-01-15T12:00:00.000Z"}

    Success envelope (every other route):
        {"success": true|false, "message": "...", ...route-specific fields}

Both shapes are part of the client contract; which one a path uses is fixed
by STATUS_ENVELOPE_PATHS, so errors come back in the same shape as the
route's successful responses.
"""

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from smart_tourism.models.document import utc_now_iso
from smart_tourism.schemas.common import StatusEnvelope

STATUS_ENVELOPE_PATHS = frozenset({"/api/spots", "/api/test"})


def format_response(data: Any, message: str = "Success", status_code: int = 200) -> StatusEnvelope:
    """Wrap `data` in the status envelope, stamped with the current time."""
    return StatusEnvelope(
        status=status_code,
        message=message,
        data=data,
        timestamp=utc_now_iso(),
    )


def error_response(
    request: Request,
    status_code: int,
    message: str,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Render an error in whichever envelope the requested path uses."""
    if request.url.path in STATUS_ENVELOPE_PATHS:
        content = format_response(None, message, status_code).model_dump()
    else:
        content = {"success": False, "message": message}
        if extra:
            content.update(extra)
    return JSONResponse(status_code=status_code, content=content)
