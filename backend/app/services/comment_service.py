"""
Comments API - Comment Service (Error Mapping Orchestrator)
============================================================

What:  Runs each comment operation against the repository and decides which
       error the client sees when it fails.
Why:   Keeps status-code policy out of the routes and out of the repository.
How:   One method per operation. Each validates the identifier first (when it
       takes one), performs exactly one repository call, converts None into
       NotFoundError, and converts every failure into the operation's own
       HTTP-facing error with its fixed message.
Who:   Called by routes/comments.py; calls CommentRepository.

Failure Mapping:
    ┌───────────┬──────────────┬───────────┬────────────────────────────────┐
    │ Operation │ Malformed id │ No match  │ Validation / store failure     │
    ├───────────┼──────────────┼───────────┼────────────────────────────────┤
    │ list      │      -       │     -     │ 500 Failed to fetch comments   │
    │ create    │      -       │     -     │ 400 Failed to create comment   │
    │ get       │     400      │    404    │ 500 Failed to fetch comment    │
    │ update    │     400      │    404    │ 400 Failed to update comment   │
    │ delete    │     400      │    404    │ 500 Failed to delete comment   │
    └───────────┴──────────────┴───────────┴────────────────────────────────┘

    Update failures are reported as 400 while delete/read failures are 500.
    This mirrors the existing public behaviour of the endpoint and must not
    change without a product decision.

Design Decision:
    CommentService is stateless; the repository is passed to each call
    rather than stored, so a single instance serves every request.
"""

import logging
from typing import Any, Dict, List

from app.exceptions import (
    ClientInputError,
    CommentsError,
    NotFoundError,
    StoreError,
)
from app.models.comment import CommentRepository

logger = logging.getLogger(__name__)

# ── Client-facing messages ────────────────────────────────────────────────
FETCH_ALL_FAILED = "Failed to fetch comments"
CREATE_FAILED = "Failed to create comment"
FETCH_FAILED = "Failed to fetch comment"
UPDATE_FAILED = "Failed to update comment"
DELETE_FAILED = "Failed to delete comment"
INVALID_ID = "Invalid comment id"
NOT_FOUND = "Comment not found"
DELETED = "Comment deleted successfully"


class CommentService:
    """
    Business logic layer for comment operations.

    Every method either returns the value for a success response or raises
    a CommentsError subclass whose status_code and message are exactly what
    the client receives.
    """

    @staticmethod
    def _require_valid_id(repo: CommentRepository, comment_id: str) -> None:
        # Checked before any store access; malformed ids never reach MongoDB.
        if not repo.is_valid_id(comment_id):
            raise ClientInputError(message=INVALID_ID, field="id", context={"comment_id": comment_id})

    @staticmethod
    def _log_failure(operation: str, exc: Exception) -> None:
        if isinstance(exc, CommentsError):
            logger.error("%s failed: %s | Context: %s", operation, exc.message, exc.context)
        else:
            logger.error("%s failed unexpectedly: %s", operation, str(exc), exc_info=True)

    async def list_comments(self, repo: CommentRepository) -> List[Dict[str, Any]]:
        """
        Return every stored comment.

        Raises:
            StoreError: "Failed to fetch comments" (→ 500)
        """
        try:
            return await repo.find_all()
        except Exception as e:
            self._log_failure("list_comments", e)
            raise StoreError(message=FETCH_ALL_FAILED) from e

    async def create_comment(self, repo: CommentRepository, fields: Any) -> Dict[str, Any]:
        """
        Store a new comment from an arbitrary field mapping.

        Raises:
            ClientInputError: "Failed to create comment" for a rejected payload
                              or a failed insert (→ 400)
        """
        try:
            comment = await repo.create(fields)
        except Exception as e:
            self._log_failure("create_comment", e)
            raise ClientInputError(message=CREATE_FAILED) from e
        logger.info("Comment %s created", comment.get("_id"))
        return comment

    async def get_comment(self, repo: CommentRepository, comment_id: str) -> Dict[str, Any]:
        """
        Raises:
            ClientInputError: malformed id (→ 400)
            NotFoundError:    no document with this id (→ 404)
            StoreError:       "Failed to fetch comment" (→ 500)
        """
        self._require_valid_id(repo, comment_id)
        try:
            comment = await repo.find_by_id(comment_id)
        except Exception as e:
            self._log_failure("get_comment", e)
            raise StoreError(message=FETCH_FAILED, context={"comment_id": comment_id}) from e
        if comment is None:
            raise NotFoundError(message=NOT_FOUND, resource_id=comment_id)
        return comment

    async def update_comment(
        self, repo: CommentRepository, comment_id: str, fields: Any
    ) -> Dict[str, Any]:
        """
        Merge `fields` into an existing comment and return the result.

        Raises:
            ClientInputError: malformed id, rejected payload, or failed
                              update (→ 400)
            NotFoundError:    no document with this id (→ 404)
        """
        self._require_valid_id(repo, comment_id)
        try:
            comment = await repo.update_by_id(comment_id, fields)
        except Exception as e:
            self._log_failure("update_comment", e)
            raise ClientInputError(message=UPDATE_FAILED, context={"comment_id": comment_id}) from e
        if comment is None:
            raise NotFoundError(message=NOT_FOUND, resource_id=comment_id)
        logger.info("Comment %s updated", comment_id)
        return comment

    async def delete_comment(self, repo: CommentRepository, comment_id: str) -> Dict[str, str]:
        """
        Raises:
            ClientInputError: malformed id (→ 400)
            NotFoundError:    no document with this id (→ 404)
            StoreError:       "Failed to delete comment" (→ 500)
        """
        self._require_valid_id(repo, comment_id)
        try:
            deleted = await repo.delete_by_id(comment_id)
        except Exception as e:
            self._log_failure("delete_comment", e)
            raise StoreError(message=DELETE_FAILED, context={"comment_id": comment_id}) from e
        if deleted is None:
            raise NotFoundError(message=NOT_FOUND, resource_id=comment_id)
        logger.info("Comment %s deleted", comment_id)
        return {"message": DELETED}


# Stateless; one instance serves every request
comment_service = CommentService()
