"""
Comments API - MongoDB Client Management
=========================================

What:  Async MongoDB client factory, repository wiring, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Builds a motor client from settings, wraps the configured collection in
       a CommentRepository, and exposes that repository to route handlers via
       FastAPI's dependency injection.
Who:   Called by the application lifespan (client lifecycle) and by route
       handlers (repository dependency).
When:  Client is created once at startup; the repository is resolved per request.

Architecture Decision:
    We use motor (async driver on top of pymongo) because:
    1. Non-blocking I/O: a slow query doesn't block other requests
    2. Natural fit with FastAPI's async request handling
    3. pymongo's bson package gives us ObjectId for identifier validation

Connection Pooling:
    The client owns a connection pool (maxPoolSize) shared by all requests.
    Timeouts are set here and nowhere else; the handlers never retry.
"""

import logging

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings
from app.models.comment import CommentRepository

logger = logging.getLogger(__name__)


def create_client() -> AsyncIOMotorClient:
    """
    What:  Creates the motor client with pool and timeout settings applied.
    When:  Once during application startup.

    Creating the client does not open a connection; the first operation does.
    A down server therefore surfaces as a StoreError on the first request,
    not as a startup crash.
    """
    return AsyncIOMotorClient(
        settings.mongodb_url,
        maxPoolSize=settings.mongodb_max_pool_size,
        serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
        connectTimeoutMS=settings.mongodb_connect_timeout_ms,
        socketTimeoutMS=settings.mongodb_socket_timeout_ms,
        tz_aware=True,  # created_at/updated_at come back as aware UTC datetimes
    )


def build_comment_repository(client: AsyncIOMotorClient) -> CommentRepository:
    """Wraps the configured database/collection in a CommentRepository."""
    collection = client[settings.mongodb_database][settings.mongodb_collection]
    return CommentRepository(collection)


# ── Repository Dependency ─────────────────────────────────────────────────
def get_comment_repository(request: Request) -> CommentRepository:
    """
    FastAPI dependency that provides the comment repository.

    The repository is placed on app.state by create_app() (when injected,
    e.g. in tests) or by the lifespan (when built from settings). Routes
    never reach for a module-level global.

    Example usage in a route:
        @router.get("")
        async def list_comments(repo: CommentRepository = Depends(get_comment_repository)):
            ...
    """
    return request.app.state.comment_repository


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def close_client(client: AsyncIOMotorClient) -> None:
    """
    What:  Closes all pooled connections.
    When:  Called during application shutdown (lifespan handler).
    """
    client.close()
    logger.info("MongoDB client closed")
