"""
Comments API - Access Log Middleware
=====================================

What:  One access-log line per comment request, keyed by route and comment id.
How:   Plain ASGI middleware. It reads the status from `http.response.start`
       and, once routing has run, the matched route template and path params
       from the scope.

Example lines:
    PUT /api/comments/{comment_id} 404 1.8ms [a1b2c3d4] comment=65a1f0c2e4b0a1b2c3d4e5f6
    GET /api/comments 200 3.2ms [e5f6a7b8] comment=-

Logging the template (not the raw path) groups all requests for one
operation under one key; the comment id is logged separately.

Request bodies are never logged; comment text may contain personal data.
"""

import logging
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.middleware.request_id import request_id_var

logger = logging.getLogger("comments_api.access")


class AccessLogMiddleware:
    """
    Level by status class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.

    A request that raises before a response starts is logged as 500 and the
    exception continues outward to the error handlers.
    """

    SKIP_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] in self.SKIP_PATHS:
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        status = 500

        async def send_capturing_status(message: Message) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_capturing_status)
        finally:
            self._log(scope, status, (time.perf_counter() - start_time) * 1000)

    @staticmethod
    def _log(scope: Scope, status: int, duration_ms: float) -> None:
        route = scope.get("route")
        operation = getattr(route, "path", scope["path"])
        comment_id = scope.get("path_params", {}).get("comment_id", "-")

        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        logger.log(
            level,
            "%s %s %d %.1fms [%s] comment=%s",
            scope["method"],
            operation,
            status,
            duration_ms,
            request_id_var.get(""),
            comment_id,
        )
