"""
Comments API - Comment Repository Unit Tests
=============================================

What:  Tests for CommentRepository against a mocked motor collection.
How:   The collection is a MagicMock/AsyncMock (see conftest.mock_collection);
       assertions check the exact driver calls and the error translation.

What we test:
    ✅ Identifier format check (24 hex chars only)
    ✅ Payload validation (mapping, reserved keys, `$` and dotted keys)
    ✅ create/update/delete/find call shapes and return values
    ✅ Driver errors become StoreError
"""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError, WriteError

from app.exceptions import ClientInputError, DocumentValidationError, StoreError
from app.models.comment import CommentRepository


class TestIsValidId:

    @pytest.mark.parametrize("value", [
        "65a1f0c2e4b0a1b2c3d4e5f6",
        "65A1F0C2E4B0A1B2C3D4E5F6",
        str(ObjectId()),
    ])
    def test_accepts_24_hex(self, value):
        assert CommentRepository.is_valid_id(value) is True

    @pytest.mark.parametrize("value", [
        "not-an-id",
        "",
        "abcdefghijkl",                 # 12 chars: a valid ObjectId in bytes form
        "65a1f0c2e4b0a1b2c3d4e5f",      # 23 chars
        "65a1f0c2e4b0a1b2c3d4e5f6a",    # 25 chars
        "65a1f0c2e4b0a1b2c3d4e5fz",     # non-hex
        None,
        12345,
    ])
    def test_rejects_everything_else(self, value):
        assert CommentRepository.is_valid_id(value) is False


class TestValidateFields:

    def test_returns_a_copy(self):
        fields = {"text": "hi"}
        result = CommentRepository.validate_fields(fields)
        assert result == fields
        assert result is not fields

    @pytest.mark.parametrize("payload", [None, [], ["text"], "hi", 3])
    def test_non_mapping_rejected(self, payload):
        with pytest.raises(DocumentValidationError):
            CommentRepository.validate_fields(payload)

    @pytest.mark.parametrize("key", ["_id", "created_at", "updated_at"])
    def test_reserved_keys_rejected(self, key):
        with pytest.raises(DocumentValidationError) as exc_info:
            CommentRepository.validate_fields({"text": "hi", key: "x"})
        assert exc_info.value.field == key

    def test_operator_keys_rejected_at_any_depth(self):
        with pytest.raises(DocumentValidationError):
            CommentRepository.validate_fields({"$set": {"text": "x"}})
        with pytest.raises(DocumentValidationError):
            CommentRepository.validate_fields({"meta": {"$gt": 1}})
        with pytest.raises(DocumentValidationError):
            CommentRepository.validate_fields({"tags": [{"$where": "1"}]})

    def test_dotted_keys_rejected_at_any_depth(self):
        with pytest.raises(DocumentValidationError) as exc_info:
            CommentRepository.validate_fields({"a.b": 1})
        assert exc_info.value.field == "a.b"
        with pytest.raises(DocumentValidationError) as exc_info:
            CommentRepository.validate_fields({"meta": {"x.y": 1}})
        assert exc_info.value.field == "meta.x.y"

    def test_validation_error_is_client_input(self):
        with pytest.raises(ClientInputError) as exc_info:
            CommentRepository.validate_fields({"_id": "x"})
        assert exc_info.value.status_code == 400

    def test_empty_mapping_allowed(self):
        assert CommentRepository.validate_fields({}) == {}


class TestReads:

    @pytest.mark.asyncio
    async def test_find_all(self, repository, mock_collection, sample_comment):
        mock_collection.find.return_value.to_list.return_value = [sample_comment]

        result = await repository.find_all()

        assert result == [sample_comment]
        mock_collection.find.assert_called_once_with({})
        mock_collection.find.return_value.to_list.assert_awaited_once_with(length=None)

    @pytest.mark.asyncio
    async def test_find_all_store_failure(self, repository, mock_collection):
        mock_collection.find.return_value.to_list.side_effect = ServerSelectionTimeoutError("down")

        with pytest.raises(StoreError) as exc_info:
            await repository.find_all()
        assert exc_info.value.context["error_type"] == "ServerSelectionTimeoutError"

    @pytest.mark.asyncio
    async def test_find_by_id_queries_object_id(self, repository, mock_collection, sample_comment):
        mock_collection.find_one.return_value = sample_comment

        result = await repository.find_by_id(str(sample_comment["_id"]))

        assert result == sample_comment
        mock_collection.find_one.assert_awaited_once_with({"_id": sample_comment["_id"]})

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, repository):
        assert await repository.find_by_id(str(ObjectId())) is None


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_stamps_and_returns_id(self, repository, mock_collection):
        new_id = ObjectId()
        mock_collection.insert_one.return_value = MagicMock(inserted_id=new_id)

        result = await repository.create({"text": "hi", "author": "a"})

        assert result["_id"] == new_id
        assert result["text"] == "hi"
        assert result["author"] == "a"
        assert result["created_at"] == result["updated_at"]
        assert result["created_at"].tzinfo is not None
        inserted = mock_collection.insert_one.await_args.args[0]
        assert inserted["text"] == "hi"

    @pytest.mark.asyncio
    async def test_create_invalid_payload_never_writes(self, repository, mock_collection):
        with pytest.raises(DocumentValidationError):
            await repository.create(["not", "a", "mapping"])
        mock_collection.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_write_error(self, repository, mock_collection):
        mock_collection.insert_one.side_effect = WriteError("document too large")

        with pytest.raises(StoreError):
            await repository.create({"text": "hi"})


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_uses_set_and_returns_after(self, repository, mock_collection, sample_comment):
        updated = dict(sample_comment, text="bye")
        mock_collection.find_one_and_update.return_value = updated

        result = await repository.update_by_id(str(sample_comment["_id"]), {"text": "bye"})

        assert result == updated
        call = mock_collection.find_one_and_update.await_args
        assert call.args[0] == {"_id": sample_comment["_id"]}
        assert call.args[1]["$set"]["text"] == "bye"
        assert "updated_at" in call.args[1]["$set"]
        assert "author" not in call.args[1]["$set"]
        assert call.kwargs["return_document"] is ReturnDocument.AFTER

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, repository):
        assert await repository.update_by_id(str(ObjectId()), {"text": "x"}) is None

    @pytest.mark.asyncio
    async def test_update_rejects_id_change(self, repository, mock_collection):
        with pytest.raises(DocumentValidationError):
            await repository.update_by_id(str(ObjectId()), {"_id": "x"})
        mock_collection.find_one_and_update.assert_not_awaited()


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_returns_deleted(self, repository, mock_collection, sample_comment):
        mock_collection.find_one_and_delete.return_value = sample_comment

        result = await repository.delete_by_id(str(sample_comment["_id"]))

        assert result == sample_comment
        mock_collection.find_one_and_delete.assert_awaited_once_with({"_id": sample_comment["_id"]})

    @pytest.mark.asyncio
    async def test_delete_store_failure(self, repository, mock_collection):
        mock_collection.find_one_and_delete.side_effect = ServerSelectionTimeoutError("down")

        with pytest.raises(StoreError):
            await repository.delete_by_id(str(ObjectId()))


class TestPing:

    @pytest.mark.asyncio
    async def test_ping_ok(self, repository, mock_collection):
        assert await repository.ping() is True
        mock_collection.database.command.assert_awaited_once_with("ping")

    @pytest.mark.asyncio
    async def test_ping_down(self, repository, mock_collection):
        mock_collection.database.command.side_effect = ServerSelectionTimeoutError("down")
        assert await repository.ping() is False
