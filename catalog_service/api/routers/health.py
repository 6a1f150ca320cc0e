from fastapi import APIRouter, Depends, status
from typing import Dict, Any

from catalog_service.config import get_settings
from catalog_service.domain.interfaces.store_interface import DocumentStore
from catalog_service.utils.logger import LoggerAdapter
from catalog_service.utils.timestamps import utc_now_iso
from catalog_service.api.dependencies import get_request_logger_dependency, get_store

settings = get_settings()
router = APIRouter(prefix="/health")


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    response_description="Service health status"
)
async def get_health() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        Dict: Basic service health information
    """
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": utc_now_iso()
    }


@router.get(
    "/detailed",
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    response_description="Detailed service health status"
)
async def get_detailed_health(
    store: DocumentStore = Depends(get_store),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> Dict[str, Any]:
    """
    Detailed health check endpoint including the document store.

    Args:
        store: Document store
        logger: Request logger

    Returns:
        Dict: Detailed service health information
    """
    logger.info("Performing detailed health check")

    dependencies = {
        "document_store": await store.health_check()
    }

    overall_status = "ok"
    if any(dep["status"] != "ok" for dep in dependencies.values()):
        overall_status = "error"

    return {
        "status": overall_status,
        "service": settings.SERVICE_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": utc_now_iso(),
        "dependencies": dependencies
    }
