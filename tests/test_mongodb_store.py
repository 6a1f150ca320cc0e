from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import PyMongoError

from catalog_service.infrastructure.store.mongodb_store import MongoDocumentStore
from catalog_service.utils.exceptions import (
    DocumentNotFoundError,
    StoreError,
    ValidationException
)


@pytest.fixture
def collection():
    mock = MagicMock()
    mock.insert_one = AsyncMock(return_value=MagicMock(acknowledged=True))
    mock.replace_one = AsyncMock()
    mock.find_one = AsyncMock(return_value=None)
    mock.update_one = AsyncMock(return_value=MagicMock(matched_count=1, modified_count=1))
    mock.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    return mock


@pytest.fixture
def client(collection):
    database = MagicMock()
    database.__getitem__.return_value = collection
    mock = MagicMock()
    mock.__getitem__.return_value = database
    mock.admin.command = AsyncMock(return_value={"ok": 1})
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def mongo_store(client):
    return MongoDocumentStore(client, "test_db")


def _cursor(documents):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=documents)
    return cursor


async def test_create_document_keys_by_full_path(mongo_store, client, collection):
    document_id = await mongo_store.create_document("services/hotels/items", {"title": "Grand Hotel"})

    client["test_db"].__getitem__.assert_called_with("items")
    inserted = collection.insert_one.await_args.args[0]
    assert inserted["_id"] == f"services/hotels/items/{document_id}"
    assert inserted["_parent"] == "services/hotels"
    assert inserted["title"] == "Grand Hotel"


async def test_create_document_rejects_reserved_fields(mongo_store, collection):
    with pytest.raises(ValidationException):
        await mongo_store.create_document("services", {"_id": "x"})

    collection.insert_one.assert_not_awaited()


async def test_set_document_upserts(mongo_store, collection):
    assert await mongo_store.set_document("services/hotels", {"id": "hotels"}) == "hotels"

    query, document = collection.replace_one.await_args.args
    assert query == {"_id": "services/hotels"}
    assert document == {"_id": "services/hotels", "_parent": "", "id": "hotels"}
    assert collection.replace_one.await_args.kwargs["upsert"] is True


async def test_get_document_strips_bookkeeping_fields(mongo_store, collection):
    collection.find_one.return_value = {
        "_id": "services/abc",
        "_parent": "",
        "id": "hotels",
        "name": "Hotels",
    }

    document = await mongo_store.get_document("services/abc")

    assert document.id == "abc"
    assert document.path == "services/abc"
    assert document.data == {"id": "hotels", "name": "Hotels"}


async def test_get_missing_document_returns_none(mongo_store):
    assert await mongo_store.get_document("services/missing") is None


async def test_list_documents_filters_by_parent(mongo_store, collection):
    collection.find = MagicMock(return_value=_cursor([
        {"_id": "services/hotels/items/a", "_parent": "services/hotels", "title": "A"},
    ]))

    documents = await mongo_store.list_documents("services/hotels/items")

    collection.find.assert_called_once_with({"_parent": "services/hotels"})
    assert [document.id for document in documents] == ["a"]


@pytest.mark.parametrize(
    "op,value,expected",
    [
        ("==", "hotels", "hotels"),
        ("!=", "hotels", {"$ne": "hotels"}),
        (">=", "2024-01-01", {"$gte": "2024-01-01"}),
        ("in", ("a", "b"), {"$in": ["a", "b"]}),
        ("array-contains", "admin", {"$elemMatch": {"$eq": "admin"}}),
    ]
)
async def test_query_operators_map_to_mongo_filters(mongo_store, collection, op, value, expected):
    collection.find = MagicMock(return_value=_cursor([]))

    await mongo_store.query_documents("services", "id", op, value)

    collection.find.assert_called_once_with({"_parent": "", "id": expected})


async def test_query_rejects_bad_operator_and_reserved_field(mongo_store):
    with pytest.raises(ValidationException):
        await mongo_store.query_documents("services", "id", "like", "x")
    with pytest.raises(ValidationException):
        await mongo_store.query_documents("services", "id", "in", "not-a-list")
    with pytest.raises(ValidationException):
        await mongo_store.query_documents("services", "_parent", "==", "")


async def test_update_document_sets_fields(mongo_store, collection):
    assert await mongo_store.update_document("services/hotels", {"name": "Stays"}) is True

    collection.update_one.assert_awaited_once_with(
        {"_id": "services/hotels"},
        {"$set": {"name": "Stays"}}
    )


async def test_update_missing_document_raises(mongo_store, collection):
    collection.update_one.return_value = MagicMock(matched_count=0, modified_count=0)

    with pytest.raises(DocumentNotFoundError):
        await mongo_store.update_document("services/hotels/items/missing", {"title": "X"})


async def test_delete_document_reports_removal(mongo_store, collection):
    assert await mongo_store.delete_document("services/hotels") is True

    collection.delete_one.return_value = MagicMock(deleted_count=0)
    assert await mongo_store.delete_document("services/hotels") is False


async def test_driver_errors_are_wrapped(mongo_store, collection):
    collection.find_one.side_effect = PyMongoError("connection refused")

    with pytest.raises(StoreError) as exc_info:
        await mongo_store.get_document("services/hotels")

    assert exc_info.value.status_code == 502
    assert "connection refused" in exc_info.value.message


async def test_health_check(mongo_store, client):
    health = await mongo_store.health_check()
    assert health["status"] == "ok"
    assert health["database"] == "test_db"

    client.admin.command.side_effect = PyMongoError("down")
    health = await mongo_store.health_check()
    assert health["status"] == "error"


async def test_close_closes_client(mongo_store, client):
    await mongo_store.close()

    client.close.assert_awaited_once()
