"""
API layer package for the Catalog Service.

This package contains the FastAPI dependencies and routers of the Catalog
Service.
"""

from catalog_service.api.dependencies import (
    get_store,
    get_current_session,
    get_admin_session,
    get_catalog_controller
)

__all__ = [
    "get_store",
    "get_current_session",
    "get_admin_session",
    "get_catalog_controller",
]
