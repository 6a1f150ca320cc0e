from typing import Optional
from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import uuid

from catalog_service.config import get_settings
from catalog_service.domain.interfaces.store_interface import DocumentStore
from catalog_service.domain.models.session import Session
from catalog_service.domain.services.auth_service import AuthService, require_admin
from catalog_service.domain.services.catalog_admin_controller import CatalogAdminController
from catalog_service.domain.services.service_resolver import ServiceResolver
from catalog_service.domain.services.user_admin_service import UserAdminService
from catalog_service.infrastructure.repositories.item_repository import ItemRepository
from catalog_service.infrastructure.repositories.service_repository import ServiceRepository
from catalog_service.utils.exceptions import UnauthorizedException
from catalog_service.utils.logger import get_request_logger, LoggerAdapter


settings = get_settings()
bearer_scheme = HTTPBearer(auto_error=False)


def get_correlation_id(
    request: Request,
    x_correlation_id: Optional[str] = Header(None)
) -> str:
    """
    Extract correlation ID from headers or generate a new one.

    Args:
        request: Incoming request; the middleware may already have assigned one
        x_correlation_id: Correlation ID from request header

    Returns:
        str: Correlation ID
    """
    return x_correlation_id or getattr(request.state, "correlation_id", None) or str(uuid.uuid4())


def get_request_logger_dependency(
    correlation_id: str = Depends(get_correlation_id)
) -> LoggerAdapter:
    """Provide a configured logger for the request context."""
    return get_request_logger(__name__, correlation_id)


def get_store(request: Request) -> DocumentStore:
    """
    Provide the document store opened by the application lifespan.

    Args:
        request: Incoming request

    Returns:
        DocumentStore: Shared store instance
    """
    return request.app.state.store


# Service dependencies

def get_auth_service(store: DocumentStore = Depends(get_store)) -> AuthService:
    return AuthService.from_settings(store, settings)


def get_service_resolver(store: DocumentStore = Depends(get_store)) -> ServiceResolver:
    return ServiceResolver(
        store,
        services_collection=settings.SERVICES_COLLECTION,
        strict=settings.RESOLVER_STRICT
    )


def get_item_repository(store: DocumentStore = Depends(get_store)) -> ItemRepository:
    return ItemRepository(
        store,
        services_collection=settings.SERVICES_COLLECTION,
        items_collection=settings.ITEMS_COLLECTION
    )


def get_service_repository(store: DocumentStore = Depends(get_store)) -> ServiceRepository:
    return ServiceRepository(store, services_collection=settings.SERVICES_COLLECTION)


def get_user_admin_service(store: DocumentStore = Depends(get_store)) -> UserAdminService:
    return UserAdminService(store, users_collection=settings.USERS_COLLECTION)


# Session dependencies

async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service)
) -> Session:
    """
    Resolve the bearer token to an open session.

    Raises:
        UnauthorizedException: If no token is sent or the session is not open
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException()
    return await auth_service.authenticate(credentials.credentials)


async def get_admin_session(
    session: Session = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> Session:
    """
    Admin gate for the admin panel routes.

    The admin flag is re-read from the user document, so revoking admin
    rights takes effect on the next request.
    """
    session = await auth_service.refresh_admin_flag(session)
    if not session.is_admin:
        logger.warning("Non-admin session rejected", extra={"user_id": session.user_id})
    return require_admin(session)


def get_catalog_controller(
    session: Session = Depends(get_admin_session),
    resolver: ServiceResolver = Depends(get_service_resolver),
    items: ItemRepository = Depends(get_item_repository)
) -> CatalogAdminController:
    return CatalogAdminController(session, resolver, items)
