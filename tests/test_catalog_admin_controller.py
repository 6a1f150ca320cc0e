import pytest

from catalog_service.domain.services.catalog_admin_controller import CatalogAdminController
from catalog_service.utils.exceptions import (
    ForbiddenException,
    StoreError,
    UnauthorizedException,
    ValidationException
)

GRAND_HOTEL = {"title": "Grand Hotel", "description": "Nice place", "price": "120", "location": "Paris"}


@pytest.fixture
def controller(admin_session, resolver, item_repository):
    return CatalogAdminController(admin_session, resolver, item_repository)


def test_non_admin_sessions_are_rejected(user_session, resolver, item_repository):
    with pytest.raises(ForbiddenException):
        CatalogAdminController(user_session, resolver, item_repository)
    with pytest.raises(UnauthorizedException):
        CatalogAdminController(None, resolver, item_repository)


async def test_open_resolves_and_loads(controller, store):
    assert await controller.open("hotels") == []

    assert controller.record_id == "hotels"
    assert controller.category.value == "hotels"
    assert await store.get_document("services/hotels") is not None


async def test_save_new_item_appends_to_list(controller, item_repository):
    await controller.open("hotels")

    item = await controller.save_item(GRAND_HOTEL)

    assert controller.items == [item]
    assert [i.item_id for i in await item_repository.list("hotels")] == [item.item_id]


async def test_update_patches_list_without_refetch(controller, item_repository):
    await controller.open("hotels")
    item = await controller.save_item(GRAND_HOTEL)

    updated = await controller.save_item({"title": "X", "description": "Nice place"}, item_id=item.item_id)

    assert updated.title == "X"
    assert updated.price == "120"
    assert updated.location == "Paris"
    assert controller.items == [updated]
    assert (await item_repository.get("hotels", item.item_id)).title == "X"


async def test_failed_create_leaves_list_unchanged(controller):
    await controller.open("hotels")
    existing = await controller.save_item(GRAND_HOTEL)

    with pytest.raises(ValidationException):
        await controller.save_item({"title": "", "description": "Nice place"})

    assert controller.items == [existing]


async def test_update_of_missing_item_leaves_list_unchanged(controller):
    await controller.open("hotels")
    existing = await controller.save_item(GRAND_HOTEL)

    with pytest.raises(StoreError):
        await controller.save_item({"title": "X", "description": "Y"}, item_id="missing")

    assert controller.items == [existing]


async def test_delete_requires_confirmation(controller):
    await controller.open("hotels")
    item = await controller.save_item(GRAND_HOTEL)

    with pytest.raises(ValidationException):
        await controller.delete_item(item.item_id)
    assert controller.items == [item]

    await controller.delete_item(item.item_id, confirmed=True)
    assert controller.items == []
    assert await controller.refresh() == []


async def test_operations_need_an_open_service(controller):
    with pytest.raises(ValidationException):
        await controller.save_item(GRAND_HOTEL)


async def test_open_failure_keeps_previous_state(controller):
    await controller.open("hotels")
    item = await controller.save_item(GRAND_HOTEL)

    with pytest.raises(ValidationException):
        await controller.open("bad/key")

    assert controller.service_key == "hotels"
    assert controller.items == [item]
