"""
Comments API - Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the comment resource.
Why:   Each exception type maps to one HTTP status code, so route handlers
       never build error responses by hand.
How:   Every exception carries a client-safe message and an optional context
       dict. Global handlers (registered in main.py) turn them into
       {"error": message} bodies; context is logged, never returned.
Who:   Raised by the repository (DocumentValidationError, StoreError) and by
       CommentService (the operation-specific errors).

Exception Hierarchy:
    CommentsError (base)
    ├── ClientInputError            → 400 Bad Request
    │   └── DocumentValidationError → 400 (field mapping rejected by the store layer)
    ├── NotFoundError               → 404 Not Found
    └── StoreError                  → 500 Internal Server Error

Two-stage translation:
    The repository raises low-level errors (DocumentValidationError,
    StoreError) describing what went wrong in the store. CommentService
    catches them per operation and re-raises the HTTP-facing error with the
    exact message for that operation (e.g. "Failed to update comment").
    Update and create failures become ClientInputError (400) even when the
    store itself failed; read, list and delete failures stay StoreError (500).
"""

from typing import Any, Dict, Optional


class CommentsError(Exception):
    """
    Base exception for all Comments API errors.

    Attributes:
        message:  Client-facing error description (returned as {"error": message})
        context:  Debug info for server-side logs only
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


class ClientInputError(CommentsError):
    """
    Raised when the request cannot be served because of what the client sent.

    When:    Malformed comment id, payload that is not a JSON object,
             payload rejected by the store, update that failed.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DocumentValidationError(ClientInputError):
    """Field mapping rejected by the repository before it reached MongoDB."""


class NotFoundError(CommentsError):
    """
    Raised when a well-formed identifier matches no document.

    HTTP:    404 Not Found

    The repository returns None for missing documents; CommentService converts
    None into this exception so the 404 is produced by the global handler.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Comment not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(CommentsError):
    """
    Raised when a MongoDB operation fails.

    When:    Server selection timeout, network error, write error,
             document too large to encode, etc.
    HTTP:    500 Internal Server Error

    Security Note:
        The message is always generic. The driver error (type and text) is
        kept in context and logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
