import pytest

from catalog_service.domain.services.service_resolver import ServiceResolver
from catalog_service.utils.exceptions import (
    AmbiguousResolutionError,
    StoreError,
    ValidationException
)


async def test_resolve_creates_record_on_empty_store(resolver, store):
    record_id = await resolver.resolve("hotels")

    assert record_id == "hotels"
    record = await store.get_document("services/hotels")
    assert record is not None
    assert record.data["id"] == "hotels"
    assert record.data["name"] == "Hotels"
    assert record.data["createdAt"].endswith("Z")


async def test_resolve_is_idempotent(resolver, store):
    first = await resolver.resolve("hotels")
    second = await resolver.resolve("hotels")

    assert first == second == "hotels"
    assert len(await store.list_documents("services")) == 1


async def test_id_attribute_wins_over_document_identifier(resolver, store):
    await store.set_document("services/hotels", {"id": "legacy", "name": "Old hotels"})
    seeded_id = await store.create_document("services", {"id": "hotels", "name": "Hotels"})

    assert await resolver.resolve("hotels") == seeded_id


async def test_document_identifier_wins_over_name_scan(resolver, store):
    await store.create_document("services", {"name": "hotels"})
    await store.set_document("services/hotels", {"name": "Accommodation"})

    assert await resolver.resolve("hotels") == "hotels"


async def test_name_scan_is_case_insensitive(resolver, store):
    record_id = await store.create_document("services", {"name": "SIM Cards Extra"})
    named_id = await store.create_document("services", {"name": "Guides"})

    assert await resolver.resolve("guides") == named_id
    assert record_id != named_id
    assert len(await store.list_documents("services")) == 2


async def test_ambiguous_id_attribute_takes_first_match(resolver, store, caplog):
    first = await store.create_document("services", {"id": "hotels", "name": "Hotels"})
    await store.create_document("services", {"id": "hotels", "name": "Hotels (copy)"})

    with caplog.at_level("WARNING"):
        assert await resolver.resolve("hotels") == first

    assert any("matches 2 records" in record.getMessage() for record in caplog.records)


async def test_strict_mode_raises_on_ambiguous_key(store):
    resolver = ServiceResolver(store, strict=True)
    await store.create_document("services", {"id": "hotels"})
    await store.create_document("services", {"id": "hotels"})

    with pytest.raises(AmbiguousResolutionError) as exc_info:
        await resolver.resolve("hotels")

    assert exc_info.value.status_code == 409
    assert len(exc_info.value.details["candidates"]) == 2


async def test_free_form_key_gets_title_cased_name(resolver, store):
    assert await resolver.resolve("spaTreatments") == "spaTreatments"

    record = await store.get_document("services/spaTreatments")
    assert record.data["name"] == "SpaTreatments"


@pytest.mark.parametrize("key", ["", "   ", "hotels/items", None])
async def test_invalid_keys_are_rejected(resolver, store, key):
    with pytest.raises(ValidationException):
        await resolver.resolve(key)

    assert await store.list_documents("services") == []


async def test_store_failure_surfaces(store):
    class FailingStore(type(store)):
        async def query_documents(self, *args, **kwargs):
            raise StoreError("connection refused", path="services")

    resolver = ServiceResolver(FailingStore())

    with pytest.raises(StoreError):
        await resolver.resolve("hotels")


async def test_get_record_returns_resolved_record(resolver):
    record_id = await resolver.resolve("restaurants")
    record = await resolver.get_record(record_id)

    assert record.record_id == "restaurants"
    assert record.key == "restaurants"
    assert record.name == "Restaurants"


async def test_lookup_finds_existing_records(resolver, store):
    named_id = await store.create_document("services", {"name": "Guides"})

    assert await resolver.lookup("guides") == named_id
    assert await resolver.lookup("GUIDES") == named_id


async def test_lookup_never_creates_a_record(resolver, store):
    assert await resolver.lookup("hotels") is None
    assert await store.list_documents("services") == []


async def test_scan_tolerates_records_with_non_string_fields(resolver, store):
    legacy_id = await store.create_document("services", {"id": 7, "name": 42})

    assert await resolver.resolve("hotels") == "hotels"
    assert await resolver.resolve("7") == legacy_id
    assert await resolver.lookup("42") == legacy_id

    record = await resolver.get_record(legacy_id)
    assert record.key == "7"
    assert record.name == "42"
