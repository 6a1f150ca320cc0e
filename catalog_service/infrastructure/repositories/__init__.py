"""
Repository implementations for data access.

This package provides the repositories that persist service records and
the catalog items nested under them.
"""

from catalog_service.infrastructure.repositories.item_repository import ItemRepository
from catalog_service.infrastructure.repositories.service_repository import ServiceRepository

__all__ = [
    'ItemRepository',
    'ServiceRepository'
]
