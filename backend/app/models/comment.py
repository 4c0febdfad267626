"""
Comments API - Comment Document Repository
===========================================

What:  Document-mapping layer over the MongoDB `comments` collection.
Why:   Keeps every driver call, identifier rule, and driver error in one place,
       so the service layer sees only plain dicts, None, and our own exceptions.
How:   Wraps a motor collection. Each public method performs exactly one
       collection call and translates pymongo/bson failures into StoreError.
Who:   Constructed by database.build_comment_repository(); consumed by
       CommentService through dependency injection.

Document Shape:
    {
        "_id": ObjectId("65a1f0c2e4b0a1b2c3d4e5f6"),   # assigned on insert
        "created_at": datetime (UTC),                  # managed
        "updated_at": datetime (UTC),                  # managed
        ...                                            # caller's fields, untouched
    }

    Fields other than the managed ones are opaque: the repository forwards
    whatever string-keyed mapping the caller supplied. It only rejects keys
    that would change the meaning of the write (reserved names,
    `$`-prefixed operator keys, and dotted keys that $set reads as paths).

Update semantics:
    update_by_id() applies the mapping with $set, so omitted fields keep their
    stored values, and returns the document AFTER the update.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidDocument
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from app.exceptions import DocumentValidationError, StoreError

logger = logging.getLogger(__name__)

# Keys the repository owns; callers may not set them.
RESERVED_FIELDS = frozenset({"_id", "created_at", "updated_at"})

# Driver-level failures that mean "the store could not do it"
_STORE_FAILURES = (PyMongoError, InvalidDocument, OverflowError)


def _utcnow() -> datetime:
    # MongoDB stores millisecond precision; truncate so the returned document
    # matches what a later read returns.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def _check_keys(value: Any, path: str = "") -> None:
    """Rejects `$`-prefixed and dotted keys anywhere in the payload."""
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise DocumentValidationError(
                    message="Field names must be strings",
                    field=f"{path}{key!r}",
                )
            if key.startswith("$"):
                raise DocumentValidationError(
                    message=f"Field name '{key}' must not start with '$'",
                    field=f"{path}{key}",
                )
            # Literal on insert but a nested path under $set; reject so both agree
            if "." in key:
                raise DocumentValidationError(
                    message=f"Field name '{key}' must not contain '.'",
                    field=f"{path}{key}",
                )
            _check_keys(item, f"{path}{key}.")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _check_keys(item, f"{path}{index}.")


class CommentRepository:
    """
    Persistence collaborator for comments.

    Stateless apart from the collection handle; safe to share across
    concurrent requests (motor's pool handles concurrency).

    Methods:
        is_valid_id():   Identifier format check (no I/O)
        find_all():      All comments
        create():        Insert and return the stored document
        find_by_id():    Document or None
        update_by_id():  Post-update document or None
        delete_by_id():  Deleted document or None
        ping():          Connectivity check for /health
    """

    def __init__(self, collection):
        self._collection = collection

    # ── Identifier Format ─────────────────────────────────────────────────

    @staticmethod
    def is_valid_id(value: Any) -> bool:
        """
        True only for a 24-character hexadecimal string.

        Why not ObjectId.is_valid() alone: it also accepts any 12-byte
        value, and a 12-character string like "abcdefghijkl" would pass.
        """
        return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)

    # ── Field Mapping Validation ──────────────────────────────────────────

    @staticmethod
    def validate_fields(fields: Any) -> Dict[str, Any]:
        """
        Checks a caller-supplied mapping before it is written.

        Raises:
            DocumentValidationError: not a mapping, reserved key, `$` key, or dotted key
        """
        if not isinstance(fields, Mapping):
            raise DocumentValidationError(
                message="Comment payload must be a JSON object",
                context={"received_type": type(fields).__name__},
            )
        reserved = RESERVED_FIELDS.intersection(fields)
        if reserved:
            name = sorted(reserved)[0]
            raise DocumentValidationError(
                message=f"Field '{name}' is managed by the server and cannot be set",
                field=name,
            )
        _check_keys(fields)
        return dict(fields)

    # ── Queries ───────────────────────────────────────────────────────────

    async def find_all(self) -> List[Dict[str, Any]]:
        try:
            return await self._collection.find({}).to_list(length=None)
        except _STORE_FAILURES as e:
            raise StoreError(
                message="Could not list comments",
                context={"operation": "find_all", "error_type": type(e).__name__, "error": str(e)},
            ) from e

    async def find_by_id(self, comment_id: str) -> Optional[Dict[str, Any]]:
        try:
            return await self._collection.find_one({"_id": ObjectId(comment_id)})
        except _STORE_FAILURES as e:
            raise StoreError(
                message="Could not fetch comment",
                context={"operation": "find_by_id", "comment_id": comment_id,
                         "error_type": type(e).__name__, "error": str(e)},
            ) from e

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, fields: Any) -> Dict[str, Any]:
        """
        Inserts a new comment and returns it with its assigned `_id`.

        Raises:
            DocumentValidationError: payload rejected before any I/O
            StoreError: insert failed
        """
        document = self.validate_fields(fields)
        now = _utcnow()
        document["created_at"] = now
        document["updated_at"] = now
        try:
            result = await self._collection.insert_one(document)
        except _STORE_FAILURES as e:
            raise StoreError(
                message="Could not create comment",
                context={"operation": "create", "error_type": type(e).__name__, "error": str(e)},
            ) from e
        document["_id"] = result.inserted_id
        logger.debug("Inserted comment %s", result.inserted_id)
        return document

    async def update_by_id(self, comment_id: str, fields: Any) -> Optional[Dict[str, Any]]:
        """
        Applies `fields` with $set and returns the document after the update.

        Returns None when no document has this id.

        Raises:
            DocumentValidationError: payload rejected before any I/O
            StoreError: update failed
        """
        changes = self.validate_fields(fields)
        changes["updated_at"] = _utcnow()
        try:
            return await self._collection.find_one_and_update(
                {"_id": ObjectId(comment_id)},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except _STORE_FAILURES as e:
            raise StoreError(
                message="Could not update comment",
                context={"operation": "update_by_id", "comment_id": comment_id,
                         "error_type": type(e).__name__, "error": str(e)},
            ) from e

    async def delete_by_id(self, comment_id: str) -> Optional[Dict[str, Any]]:
        """Deletes and returns the document, or None when nothing matched."""
        try:
            return await self._collection.find_one_and_delete({"_id": ObjectId(comment_id)})
        except _STORE_FAILURES as e:
            raise StoreError(
                message="Could not delete comment",
                context={"operation": "delete_by_id", "comment_id": comment_id,
                         "error_type": type(e).__name__, "error": str(e)},
            ) from e

    # ── Health ────────────────────────────────────────────────────────────

    async def ping(self) -> bool:
        """Round-trips a `ping` command; False when the server is unreachable."""
        try:
            await self._collection.database.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
