"""
Smart Tourism Backend — FastAPI Application Factory
=====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn smart_tourism.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│ Logging  │→│  GZip  │→│    CORS      │  │
    │  └──────────┘ └──────────┘ └────────┘ └──────────────┘  │
    │                                                          │
    │  Routes (/api):                                          │
    │  ┌──────────┐ ┌──────────┐ ┌─────────────┐ ┌─────────┐  │
    │  │  users   │ │  spots   │ │ itineraries │ │ reviews │  │
    │  └──────────┘ └──────────┘ └─────────────┘ └─────────┘  │
    │  GET /health        /images/* (static, when present)     │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Auth→401 │ NotFound→404 │ DB→500  │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Create the MongoDB client, ping it, ensure indexes
    4. Log startup complete

    Shutdown:
    1. Close the MongoDB client (all pooled connections)
    2. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles
from pymongo.errors import PyMongoError

from smart_tourism import __version__
from smart_tourism.config import settings
from smart_tourism.database import create_database
from smart_tourism.exceptions import (
    AuthenticationError,
    DatabaseError,
    NotFoundError,
    SmartTourismError,
    ValidationError,
)
from smart_tourism.middleware.logging import RequestLoggingMiddleware
from smart_tourism.middleware.request_id import RequestIDMiddleware, request_id_var
from smart_tourism.responses import error_response
from smart_tourism.routes import health, itineraries, reviews, spots, users

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request data"
INTERNAL_ERROR_MESSAGE = "Internal server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Called once at startup, before the database client is created, so the
    connection messages already use this format.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    A database that cannot be reached at startup is logged, not fatal: the
    server still comes up, /health reports "unhealthy", and data routes
    answer 500 until the driver reconnects.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Smart Tourism Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.warning("Configuration warning: %s", str(e))

    database = create_database(settings)
    app.state.database = database

    try:
        await database.ping()
        logger.info("Connected to MongoDB database '%s'", database.name)
        await database.ensure_indexes()
    except PyMongoError as e:
        logger.error("MongoDB connection error: %s", str(e))
        logger.error("Check MONGODB_URI; requests needing the database will fail.")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Smart Tourism Backend shutting down...")
    await database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (body/query failed parsing)
        AuthenticationError     → 401 Unauthorized
        NotFoundError           → 404 Not Found
        DatabaseError           → 500 Internal Server Error
        SmartTourismError       → its status_code
        Exception (fallback)    → 500 Internal Server Error

    Every body comes from `error_response`, which picks the status envelope
    or the success envelope by path. Exception context and driver errors are
    logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(request, 400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """The body or query string did not parse into the route's schema."""
        rid = request_id_var.get("")
        logger.warning("[%s] Request validation failed: %d error(s)", rid, len(exc.errors()))
        return error_response(
            request,
            400,
            INVALID_REQUEST_MESSAGE,
            extra={"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Login rejected: %s", rid, exc.message)
        return error_response(request, 401, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(request, 404, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(request, 500, exc.message)

    @app.exception_handler(SmartTourismError)
    async def handle_application_error(request: Request, exc: SmartTourismError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(request, exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: the stack trace is logged, the client gets a generic 500."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(request, 500, INTERNAL_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    Tests build their own instance and override `get_database`.
    """
    app = FastAPI(
        title="Smart Tourism API",
        description=(
            "Backend for the Smart Tourism web client: accounts and travel "
            "preferences, the spot catalog, per-user itineraries and spot reviews."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
        expose_headers=["Content-Range", "X-Content-Range", "X-Request-ID"],
        max_age=86400,
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(users.router)
    app.include_router(spots.router)
    app.include_router(itineraries.router)
    app.include_router(reviews.router)
    app.include_router(health.router)

    images = Path(settings.images_dir)
    if images.is_dir():
        app.mount("/images", StaticFiles(directory=images), name="images")
    else:
        logger.info("Images directory %s not found; /images is not served", images)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
