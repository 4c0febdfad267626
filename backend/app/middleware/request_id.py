"""
Comments API - Request ID Middleware
=====================================

What:  Assigns a correlation ID to each request and echoes it in the response.
Why:   Error bodies are deliberately terse ({"error": "..."}); the
       X-Request-ID header is how a client report is matched to the
       server-side log lines that hold the details.
How:   Plain ASGI middleware. It sets the ID in a ContextVar before the app
       runs and stamps the header onto the `http.response.start` message.

ContextVar visibility:
    The ID is set in the task that serves the request, so it is still
    readable when an unhandled exception reaches Starlette's outermost
    error middleware. The catch-all handler in main.py reads it from there
    and adds the header itself.
"""

import uuid
from contextvars import ContextVar

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware:
    """Sets request_id_var and scope state; adds X-Request-ID to every HTTP response."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Reuse the caller's ID so a trace can span the client and this service
        rid = Headers(scope=scope).get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        scope.setdefault("state", {})["request_id"] = rid

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = rid
            await send(message)

        await self.app(scope, receive, send_with_request_id)
