# Middleware package init
"""
Comments API - Middleware Package
==================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    1. Request ID first: the access log line and every error log carry it
    2. Access log: records status, route template, and comment id on the way out

Both are plain ASGI callables, so they share the request's task and scope
with the routing layer.
"""
