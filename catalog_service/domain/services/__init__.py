"""
Domain services for the Catalog Service: key resolution, authentication,
user administration and the admin content controller.
"""

from catalog_service.domain.services.service_resolver import ServiceResolver
from catalog_service.domain.services.auth_service import AuthService, require_admin
from catalog_service.domain.services.user_admin_service import UserAdminService
from catalog_service.domain.services.catalog_admin_controller import CatalogAdminController

__all__ = [
    "ServiceResolver",
    "AuthService",
    "require_admin",
    "UserAdminService",
    "CatalogAdminController",
]
