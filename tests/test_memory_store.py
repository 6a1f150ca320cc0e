import pytest

from catalog_service.utils.exceptions import DocumentNotFoundError, ValidationException


async def test_create_and_get(store):
    document_id = await store.create_document("services", {"name": "Hotels"})

    document = await store.get_document(f"services/{document_id}")

    assert document.id == document_id
    assert document.path == f"services/{document_id}"
    assert document.data == {"name": "Hotels"}


async def test_get_missing_returns_none(store):
    assert await store.get_document("services/missing") is None


async def test_set_document_replaces_fields(store):
    await store.set_document("services/hotels", {"name": "Hotels", "route": "/services/hotels"})
    await store.set_document("services/hotels", {"name": "Stays"})

    document = await store.get_document("services/hotels")
    assert document.data == {"name": "Stays"}


async def test_returned_data_is_a_copy(store):
    await store.set_document("services/hotels", {"tags": ["a"]})

    document = await store.get_document("services/hotels")
    document.data["tags"].append("b")

    again = await store.get_document("services/hotels")
    assert again.data == {"tags": ["a"]}


async def test_list_keeps_insertion_order(store):
    first = await store.create_document("services", {"name": "A"})
    second = await store.create_document("services", {"name": "B"})

    assert [document.id for document in await store.list_documents("services")] == [first, second]


async def test_sub_collections_are_independent(store):
    await store.create_document("services/hotels/items", {"title": "Grand Hotel"})

    assert await store.list_documents("services/guides/items") == []
    assert len(await store.list_documents("services/hotels/items")) == 1
    assert await store.list_documents("services") == []


@pytest.mark.parametrize(
    "op,value,expected",
    [
        ("==", 2, ["b"]),
        ("!=", 2, ["a", "c"]),
        ("<", 2, ["a"]),
        ("<=", 2, ["a", "b"]),
        (">", 2, ["c"]),
        (">=", 2, ["b", "c"]),
        ("in", [1, 3], ["a", "c"]),
    ]
)
async def test_query_operators(store, op, value, expected):
    for document_id, rank in (("a", 1), ("b", 2), ("c", 3)):
        await store.set_document(f"ranks/{document_id}", {"rank": rank})

    results = await store.query_documents("ranks", "rank", op, value)

    assert [document.id for document in results] == expected


async def test_query_array_contains(store):
    await store.set_document("users/a", {"roles": ["admin", "editor"]})
    await store.set_document("users/b", {"roles": ["editor"]})
    await store.set_document("users/c", {"roles": "admin"})

    results = await store.query_documents("users", "roles", "array-contains", "admin")

    assert [document.id for document in results] == ["a"]


async def test_query_skips_missing_and_mismatched_fields(store):
    await store.set_document("users/a", {"createdAt": "2024-01-01T00:00:00.000Z"})
    await store.set_document("users/b", {"createdAt": 5})
    await store.set_document("users/c", {"name": "no date"})

    results = await store.query_documents("users", "createdAt", ">=", "2023-01-01")

    assert [document.id for document in results] == ["a"]


async def test_query_rejects_unknown_operator(store):
    with pytest.raises(ValidationException):
        await store.query_documents("users", "name", "like", "x")


async def test_update_merges_fields(store):
    await store.set_document("services/hotels", {"name": "Hotels", "route": "/services/hotels"})

    assert await store.update_document("services/hotels", {"name": "Stays"}) is True

    document = await store.get_document("services/hotels")
    assert document.data == {"name": "Stays", "route": "/services/hotels"}


async def test_update_missing_raises(store):
    with pytest.raises(DocumentNotFoundError) as exc_info:
        await store.update_document("services/missing", {"name": "x"})

    assert exc_info.value.status_code == 404


async def test_delete_reports_removal(store):
    await store.set_document("services/hotels", {"name": "Hotels"})

    assert await store.delete_document("services/hotels") is True
    assert await store.delete_document("services/hotels") is False


@pytest.mark.parametrize("path", ["", "services/hotels", "services//items"])
async def test_collection_paths_are_validated(store, path):
    with pytest.raises(ValidationException):
        await store.list_documents(path)


async def test_health_check(store):
    health = await store.health_check()

    assert health["status"] == "ok"
    assert health["backend"] == "memory"
