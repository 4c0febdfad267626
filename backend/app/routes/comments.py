"""
Comments API - Comment Route Handlers
======================================

What:  The five CRUD endpoints mounted under /api/comments.
How:   Each handler pulls the repository from DI, delegates to CommentService,
       and returns the result. Errors raised by the service are formatted by
       the global handlers in main.py as {"error": "..."}.

Route Inventory:
    GET    /api/comments        list all comments               200
    POST   /api/comments        create from a field mapping     201
    GET    /api/comments/{id}   fetch one                       200
    PUT    /api/comments/{id}   merge fields, return result     200
    DELETE /api/comments/{id}   delete                          200

    List and create also answer on the trailing-slash spelling
    (/api/comments/) without a redirect.

Why `comment_id: str` (not a typed path param):
    The id format check belongs to the service so that a malformed id gets
    our 400 {"error": "Invalid comment id"} instead of FastAPI's 422.
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends

from app.database import get_comment_repository
from app.models.comment import CommentRepository
from app.schemas.comment import CommentDocument, ErrorResponse, MessageResponse
from app.services.comment_service import comment_service

router = APIRouter(prefix="/api/comments", tags=["Comments"])


@router.get("/", response_model=List[CommentDocument], include_in_schema=False)
@router.get(
    "",
    response_model=List[CommentDocument],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all comments",
)
async def list_comments(
    repo: CommentRepository = Depends(get_comment_repository),
) -> List[dict]:
    return await comment_service.list_comments(repo)


@router.post("/", status_code=201, response_model=CommentDocument, include_in_schema=False)
@router.post(
    "",
    status_code=201,
    response_model=CommentDocument,
    responses={400: {"description": "Invalid payload or write failure", "model": ErrorResponse}},
    summary="Create a comment",
)
async def create_comment(
    fields: Any = Body(default=None, description="Comment fields (arbitrary JSON object)"),
    repo: CommentRepository = Depends(get_comment_repository),
) -> dict:
    """
    Store the submitted fields as a new comment.

    The response is the stored document, including its assigned `_id`.
    """
    return await comment_service.create_comment(repo, fields)


@router.get(
    "/{comment_id}",
    response_model=CommentDocument,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Comment not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Get a comment by id",
)
async def get_comment(
    comment_id: str,
    repo: CommentRepository = Depends(get_comment_repository),
) -> dict:
    return await comment_service.get_comment(repo, comment_id)


@router.put(
    "/{comment_id}",
    response_model=CommentDocument,
    responses={
        400: {"description": "Malformed id, invalid payload, or update failure", "model": ErrorResponse},
        404: {"description": "Comment not found", "model": ErrorResponse},
    },
    summary="Update a comment by id",
)
async def update_comment(
    comment_id: str,
    fields: Any = Body(default=None, description="Comment fields (arbitrary JSON object)"),
    repo: CommentRepository = Depends(get_comment_repository),
) -> dict:
    """
    Merge the submitted fields into the stored comment.

    Fields not present in the body keep their stored values. The response is
    the document after the update has been applied.
    """
    return await comment_service.update_comment(repo, comment_id, fields)


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Comment not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Delete a comment by id",
)
async def delete_comment(
    comment_id: str,
    repo: CommentRepository = Depends(get_comment_repository),
) -> dict:
    return await comment_service.delete_comment(repo, comment_id)
