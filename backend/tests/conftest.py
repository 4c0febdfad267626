"""
Comments API - Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests run without a MongoDB server: the repository is either given a
       mocked motor collection or replaced by an in-memory fake.

Fixture Hierarchy:
    ├── mock_collection: MagicMock/AsyncMock standing in for a motor collection
    ├── repository: real CommentRepository over mock_collection
    ├── fake_repository: in-memory CommentRepository with call counting
    ├── sample_comment: a stored comment document
    └── test_client: HTTPX AsyncClient for an app built around fake_repository
"""

import copy
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport

# Override settings BEFORE any app imports
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "comments_test"
os.environ["LOG_LEVEL"] = "WARNING"

from app.exceptions import StoreError  # noqa: E402
from app.models.comment import CommentRepository  # noqa: E402


class FakeCommentRepository(CommentRepository):
    """
    In-memory persistence collaborator.

    Keeps the real identifier and payload validation (inherited) and replaces
    only the I/O. `calls` counts store accesses so tests can assert that a
    request never reached the store. Set `fail_with` to make every store
    call raise.
    """

    def __init__(self):
        super().__init__(collection=None)
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self.fail_with: Optional[Exception] = None
        self.healthy = True

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fail_with is not None:
            raise self.fail_with

    async def find_all(self):
        self._enter("find_all")
        return [copy.deepcopy(doc) for doc in self.documents.values()]

    async def create(self, fields):
        document = self.validate_fields(fields)
        self._enter("create")
        now = datetime.now(timezone.utc)
        document.update({"_id": ObjectId(), "created_at": now, "updated_at": now})
        self.documents[document["_id"]] = document
        return copy.deepcopy(document)

    async def find_by_id(self, comment_id):
        self._enter("find_by_id")
        doc = self.documents.get(ObjectId(comment_id))
        return copy.deepcopy(doc) if doc else None

    async def update_by_id(self, comment_id, fields):
        changes = self.validate_fields(fields)
        self._enter("update_by_id")
        doc = self.documents.get(ObjectId(comment_id))
        if doc is None:
            return None
        doc.update(changes)
        doc["updated_at"] = datetime.now(timezone.utc)
        return copy.deepcopy(doc)

    async def delete_by_id(self, comment_id):
        self._enter("delete_by_id")
        return self.documents.pop(ObjectId(comment_id), None)

    async def ping(self):
        return self.healthy


@pytest.fixture
def mock_collection():
    """
    A motor collection double.

    `find()` is synchronous in motor and returns a cursor whose `to_list()`
    is awaited; every other method used by the repository is a coroutine.
    """
    collection = MagicMock()
    collection.find.return_value.to_list = AsyncMock(return_value=[])
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.find_one_and_delete = AsyncMock(return_value=None)
    collection.database.command = AsyncMock(return_value={"ok": 1.0})
    return collection


@pytest.fixture
def repository(mock_collection):
    return CommentRepository(mock_collection)


@pytest.fixture
def fake_repository():
    return FakeCommentRepository()


@pytest.fixture
def failing_store():
    """A StoreError as the repository would raise for a lost connection."""
    return StoreError(context={"error_type": "ServerSelectionTimeoutError"})


@pytest.fixture
def sample_comment():
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId("65a1f0c2e4b0a1b2c3d4e5f6"),
        "text": "hi",
        "author": "a",
        "created_at": now,
        "updated_at": now,
    }


@pytest_asyncio.fixture
async def test_client(fake_repository):
    """
    HTTPX AsyncClient talking to an app wired to fake_repository.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/comments")
            assert response.status_code == 200
    """
    from app.main import create_app
    app = create_app(repository=fake_repository)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
