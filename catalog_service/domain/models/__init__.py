"""Domain models for the Catalog Service."""

from catalog_service.domain.models.category import (
    ServiceCategory,
    CategoryAttributes,
    GenericAttributes,
    HotelAttributes,
    RestaurantAttributes,
    SimCardAttributes,
    attributes_model_for
)
from catalog_service.domain.models.service_record import (
    ServiceRecord,
    DEFAULT_SERVICES,
    document_matches_key,
    title_from_key
)
from catalog_service.domain.models.catalog_item import CatalogItem
from catalog_service.domain.models.session import Session
from catalog_service.domain.models.user import UserAccount

__all__ = [
    "ServiceCategory",
    "CategoryAttributes",
    "GenericAttributes",
    "HotelAttributes",
    "RestaurantAttributes",
    "SimCardAttributes",
    "attributes_model_for",
    "ServiceRecord",
    "DEFAULT_SERVICES",
    "document_matches_key",
    "title_from_key",
    "CatalogItem",
    "Session",
    "UserAccount",
]
