# Routes package init
"""
Comments API - API Routes Package
==================================

Route Inventory:
    - comments.py: GET/POST     /api/comments
                   GET/PUT/DELETE /api/comments/{id}
    - health.py:   GET          /health

Routes are THIN: they extract path params and bodies, resolve the
repository dependency, call CommentService, and return its result.
"""
