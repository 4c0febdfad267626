# Services package init
"""
Comments API - Services Layer
==============================

Service Inventory:
    - CommentService: runs each CRUD operation against the repository and
      maps every outcome to the status code and message the client sees.
"""
