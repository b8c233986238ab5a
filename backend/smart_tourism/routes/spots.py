"""
Smart Tourism Backend — Spot and Diagnostic Route Handlers
============================================================

What:  GET /api/spots (the whole catalog) and GET /api/test (database diagnostics).
How:   Both answer in the status envelope {status, message, data, timestamp};
       their errors use the same envelope with data = null (see responses.py).
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from smart_tourism.database import Database, get_database
from smart_tourism.models.spot import Spot
from smart_tourism.responses import format_response
from smart_tourism.schemas.common import DiagnosticsData, StatusEnvelope
from smart_tourism.services.spot_service import spot_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Spots"])


@router.get(
    "/spots",
    response_model=StatusEnvelope[List[Spot]],
    summary="List every spot in the catalog",
    description="Returns the unfiltered spot catalog; image references are expanded to URLs.",
)
async def list_spots(db: Database = Depends(get_database)):
    spots = await spot_service.list_spots(db)
    return format_response(spots, "Spots retrieved successfully")


@router.get(
    "/test",
    response_model=StatusEnvelope[DiagnosticsData],
    summary="Database connection test",
)
async def test_database(db: Database = Depends(get_database)):
    data = await spot_service.diagnostics(db)
    return format_response(data, "Database connection test successful")
