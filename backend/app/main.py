"""
Comments API - FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware, routes, error formatting, and
       lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn app.main:app) and by tests with an injected
       repository (create_app(repository=fake)).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:   Req ID → Access Log → GZip → CORS    │
    │                                                     │
    │  Routes:       /api/comments[/{id}]   /health       │
    │                                                     │
    │  Exception Handlers → {"error": message}            │
    │    ClientInputError→400  NotFound→404  Store→500    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Build the MongoDB client + CommentRepository, unless one was injected
    Shutdown:
    1. Close the MongoDB client if this app created it
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import build_comment_repository, close_client, create_client
from app.exceptions import ClientInputError, NotFoundError, StoreError
from app.middleware.logging import AccessLogMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.models.comment import CommentRepository
from app.routes import comments, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Driver heartbeats and uvicorn's own access log duplicate our middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, config validation, MongoDB client.
    Shutdown: close the client (only when this lifespan created it).
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Comments API starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    client = None
    if app.state.comment_repository is None:
        client = create_client()
        app.state.comment_repository = build_comment_repository(client)
        logger.info(
            "Using MongoDB collection %s.%s",
            settings.mongodb_database,
            settings.mongodb_collection,
        )

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Comments API shutting down...")
    if client is not None:
        await close_client(client)
        app.state.comment_repository = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and the {"error": message} body.

    Handler hierarchy:
        ClientInputError        → 400 (includes DocumentValidationError)
        RequestValidationError  → 400 (body was not parseable JSON)
        NotFoundError           → 404
        StoreError              → 500
        Exception (fallback)    → 500

    Security: details (driver errors, context dicts, stack traces) are logged
    server-side only; responses carry nothing but the message.
    """

    @app.exception_handler(ClientInputError)
    async def handle_client_input_error(request: Request, exc: ClientInputError):
        rid = request_id_var.get("")
        logger.warning("[%s] Client input error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request: %s", rid, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Malformed request body"})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all; the stack trace is logged, never returned.

        Starlette runs this handler outside the user middleware stack, so the
        request ID header is added here rather than by RequestIDMiddleware.
        """
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(repository: Optional[CommentRepository] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        repository: Persistence collaborator to serve requests with. When
                    omitted, the lifespan builds one from settings at startup.
    """
    app = FastAPI(
        title="Comments API",
        description="CRUD endpoints for comments stored in MongoDB.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.comment_repository = repository

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added runs first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(comments.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
