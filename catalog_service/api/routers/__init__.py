"""
API routers package for the Catalog Service.

This package contains FastAPI routers for health checks, authentication,
service and item administration, user administration and the public catalog.
"""

from catalog_service.api.routers import auth, catalog, content, health, services, users

__all__ = ["auth", "catalog", "content", "health", "services", "users"]
