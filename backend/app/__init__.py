"""
Comments API - Application Package
===================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Error-status policy)  │  ← one repository call per operation
    ├─────────────────────────────────────┤
    │   Models & Schemas (Documents)      │  ← CommentRepository + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← motor client lifecycle
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
