from fastapi import APIRouter, Depends, Path, Query, Response, status

from catalog_service.api.dependencies import get_catalog_controller, get_request_logger_dependency
from catalog_service.domain.models.catalog_item import CatalogItem
from catalog_service.domain.schemas.item import ItemListResponse, ItemWrite
from catalog_service.domain.services.catalog_admin_controller import CatalogAdminController
from catalog_service.utils.logger import LoggerAdapter


router = APIRouter()


@router.get(
    "/{service_key}/items",
    response_model=ItemListResponse,
    status_code=status.HTTP_200_OK,
    summary="List the items of a service"
)
async def list_items(
    service_key: str = Path(..., description="Service key, e.g. hotels"),
    controller: CatalogAdminController = Depends(get_catalog_controller)
) -> ItemListResponse:
    items = await controller.open(service_key)
    return ItemListResponse(
        service_key=service_key,
        record_id=controller.record_id,
        items=items,
        total=len(items)
    )


@router.post(
    "/{service_key}/items",
    response_model=CatalogItem,
    status_code=status.HTTP_201_CREATED,
    summary="Create an item"
)
async def create_item(
    payload: ItemWrite,
    service_key: str = Path(..., description="Service key, e.g. hotels"),
    controller: CatalogAdminController = Depends(get_catalog_controller),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> CatalogItem:
    """
    Create an item under the service. Title and description are required;
    only the attributes of the service's category are stored.
    """
    await controller.open(service_key)
    item = await controller.save_item(payload.fields())
    logger.info(
        f"Item {item.item_id} added to {service_key}",
        extra={"record_id": controller.record_id}
    )
    return item


@router.put(
    "/{service_key}/items/{item_id}",
    response_model=CatalogItem,
    status_code=status.HTTP_200_OK,
    summary="Update an item"
)
async def update_item(
    payload: ItemWrite,
    service_key: str = Path(..., description="Service key, e.g. hotels"),
    item_id: str = Path(..., description="Item identifier"),
    controller: CatalogAdminController = Depends(get_catalog_controller)
) -> CatalogItem:
    """
    Merge the supplied fields into the item; stored fields that are not
    supplied keep their values.
    """
    await controller.open(service_key)
    return await controller.save_item(payload.fields(), item_id=item_id)


@router.delete(
    "/{service_key}/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an item",
    response_class=Response
)
async def delete_item(
    service_key: str = Path(..., description="Service key, e.g. hotels"),
    item_id: str = Path(..., description="Item identifier"),
    confirm: bool = Query(default=False, description="Must be true to delete"),
    controller: CatalogAdminController = Depends(get_catalog_controller)
) -> Response:
    await controller.open(service_key)
    await controller.delete_item(item_id, confirmed=confirm)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
