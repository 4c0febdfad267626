"""
Comments API - Pydantic Response Schemas
=========================================

What:  Pydantic models defining the API contract for the comments resource.
Why:   Consistent serialization and OpenAPI documentation.
How:   FastAPI validates handler return values against these models and
       serializes them to JSON.

Why CommentDocument allows extra fields:
    Comment fields are defined by the caller, not by us. The model declares
    only what the server guarantees (`_id`, timestamps) and passes every
    other stored field through unchanged.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class CommentDocument(BaseModel):
    """
    What:  A stored comment as returned by every comment endpoint.
    Who:   GET/POST /api/comments, GET/PUT /api/comments/{id}.

    Example:
        {
            "_id": "65a1f0c2e4b0a1b2c3d4e5f6",
            "text": "hi",
            "author": "a",
            "created_at": "2024-01-15T12:00:00Z",
            "updated_at": "2024-01-15T12:00:00Z"
        }
    """
    model_config = ConfigDict(extra="allow")

    # Any: documents written by other tools may carry int, UUID or Binary ids
    id: Any = Field(alias="_id", description="Document identifier (24 hex characters)")
    created_at: Optional[datetime] = Field(default=None, description="Creation time (UTC)")
    updated_at: Optional[datetime] = Field(default=None, description="Last update time (UTC)")

    @field_serializer("id")
    def stringify_id(self, v: Any) -> str:
        """MongoDB hands back ObjectId; the API speaks strings."""
        return str(v)


class MessageResponse(BaseModel):
    """Confirmation body, e.g. {"message": "Comment deleted successfully"}."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every comment endpoint.

    Example:
        {"error": "Comment not found"}

    Internal details (driver errors, ids, request ids) are logged server-side;
    the X-Request-ID response header correlates a response with those logs.
    """
    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
