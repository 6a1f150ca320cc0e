from fastapi import APIRouter, Depends, Path, status

from catalog_service.api.dependencies import (
    get_item_repository,
    get_request_logger_dependency,
    get_service_resolver
)
from catalog_service.domain.schemas.item import ItemListResponse
from catalog_service.domain.services.service_resolver import ServiceResolver
from catalog_service.infrastructure.repositories.item_repository import ItemRepository
from catalog_service.utils.exceptions import NotFoundException
from catalog_service.utils.logger import LoggerAdapter


router = APIRouter()


@router.get(
    "/{service_key}",
    response_model=ItemListResponse,
    status_code=status.HTTP_200_OK,
    summary="Browse a service",
    response_description="Items offered under the service"
)
async def get_catalog(
    service_key: str = Path(..., description="Service key, e.g. hotels"),
    resolver: ServiceResolver = Depends(get_service_resolver),
    items: ItemRepository = Depends(get_item_repository),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> ItemListResponse:
    """
    Public listing used by the customer service screens.

    Read-only: an unknown key is a 404 and never creates a service record.

    Args:
        service_key: Service key
        resolver: Service key resolver
        items: Item repository
        logger: Request logger

    Returns:
        ItemListResponse: Items of the resolved service

    Raises:
        NotFoundException: If no service record matches the key
    """
    record_id = await resolver.lookup(service_key)
    if record_id is None:
        raise NotFoundException("Service", service_key)
    found = await items.list(record_id)
    logger.with_context(service_key=service_key, record_id=record_id).debug(
        f"Catalog {service_key} has {len(found)} items"
    )
    return ItemListResponse(
        service_key=service_key,
        record_id=record_id,
        items=found,
        total=len(found)
    )
