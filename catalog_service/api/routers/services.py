from fastapi import APIRouter, Depends, Path, status
from typing import List

from catalog_service.api.dependencies import (
    get_admin_session,
    get_request_logger_dependency,
    get_service_repository,
    get_service_resolver
)
from catalog_service.domain.models.category import ServiceCategory
from catalog_service.domain.models.service_record import ServiceRecord
from catalog_service.domain.models.session import Session
from catalog_service.domain.schemas.service import (
    DeleteResponse,
    ResolveResponse,
    ServiceCreate,
    ServiceListResponse,
    ServiceWrite
)
from catalog_service.domain.services.service_resolver import ServiceResolver
from catalog_service.infrastructure.repositories.service_repository import ServiceRepository
from catalog_service.utils.logger import LoggerAdapter


router = APIRouter(dependencies=[Depends(get_admin_session)])


@router.get(
    "",
    response_model=ServiceListResponse,
    status_code=status.HTTP_200_OK,
    summary="List services",
    response_description="Stored service records, or the predefined types when none are stored"
)
async def list_services(
    repository: ServiceRepository = Depends(get_service_repository)
) -> ServiceListResponse:
    records, persisted = await repository.list_services()
    return ServiceListResponse(items=records, persisted=persisted)


@router.post(
    "",
    response_model=ServiceRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Create a service"
)
async def create_service(
    payload: ServiceCreate,
    repository: ServiceRepository = Depends(get_service_repository),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> ServiceRecord:
    logger.info("Creating service", extra={"service_name": payload.name})
    return await repository.create_service(
        payload.name, payload.description, payload.route, key=payload.key
    )


@router.post(
    "/initialize",
    response_model=List[ServiceRecord],
    status_code=status.HTTP_201_CREATED,
    summary="Seed the predefined services"
)
async def initialize_services(
    session: Session = Depends(get_admin_session),
    repository: ServiceRepository = Depends(get_service_repository),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> List[ServiceRecord]:
    """
    Store the five predefined service types.

    Fails with 409 when any service record already exists.
    """
    logger.info("Initializing fixed services", extra={"user_id": session.user_id})
    return await repository.initialize_default_services()


@router.post(
    "/{service_key}/resolve",
    response_model=ResolveResponse,
    status_code=status.HTTP_200_OK,
    summary="Resolve a service key"
)
async def resolve_service(
    service_key: str = Path(..., description="Service key, e.g. hotels"),
    resolver: ServiceResolver = Depends(get_service_resolver)
) -> ResolveResponse:
    """
    Resolve a service key to its record, creating the record when no
    existing one matches.
    """
    record_id = await resolver.resolve(service_key)
    category = ServiceCategory.from_key(service_key)
    return ResolveResponse(
        service_key=service_key,
        record_id=record_id,
        category=category.value if category else None
    )


@router.put(
    "/{record_id}",
    response_model=ServiceRecord,
    status_code=status.HTTP_200_OK,
    summary="Update a service"
)
async def update_service(
    payload: ServiceWrite,
    record_id: str = Path(..., description="Service record identifier"),
    repository: ServiceRepository = Depends(get_service_repository)
) -> ServiceRecord:
    return await repository.update_service(
        record_id, payload.name, payload.description, payload.route
    )


@router.delete(
    "/{record_id}",
    response_model=DeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete a service"
)
async def delete_service(
    record_id: str = Path(..., description="Service record identifier"),
    repository: ServiceRepository = Depends(get_service_repository),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> DeleteResponse:
    """
    Delete a service record. Items stored under it are left in place.
    """
    removed = await repository.delete_service(record_id)
    logger.info(f"Service {record_id} delete requested", extra={"removed": removed})
    return DeleteResponse(record_id=record_id, removed=removed)
