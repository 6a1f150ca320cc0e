from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog_service.domain.interfaces.store_interface import StoredDocument


class ServiceRecord(BaseModel):
    """
    Canonical store entity for one service category.

    ``record_id`` is the store identifier; ``key`` is the record's own ``id``
    attribute. The two usually match, but records seeded with store-assigned
    identifiers only carry the service key in ``key``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True
    )

    record_id: str
    key: Optional[str] = Field(default=None, alias="id")
    name: Optional[str] = None
    description: Optional[str] = None
    route: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_document(cls, document: StoredDocument) -> "ServiceRecord":
        data = {k: v for k, v in document.data.items() if k != "recordId"}
        return cls(record_id=document.id, **data)


def document_matches_key(document: StoredDocument, service_key: str) -> bool:
    """
    True when a stored record's identifier, ``id`` attribute or name
    (case-insensitive) equals the key.

    Works on the raw stored fields so that legacy records with non-string
    values are compared rather than rejected.
    """
    if document.id == service_key:
        return True
    key_attribute = document.data.get("id")
    if key_attribute is not None and str(key_attribute) == service_key:
        return True
    name = document.data.get("name")
    return name is not None and str(name).casefold() == service_key.casefold()


def title_from_key(service_key: str) -> str:
    """Derive a display name from a service key: ``hotels`` -> ``Hotels``."""
    return service_key[:1].upper() + service_key[1:]


# Predefined service types offered by the admin panel
DEFAULT_SERVICES: List[Dict[str, Any]] = [
    {"id": "hotels", "name": "Hotels", "description": "Accommodation services", "route": "/services/hotels"},
    {"id": "restaurants", "name": "Restaurants", "description": "Dining services", "route": "/services/restaurants"},
    {"id": "transportation", "name": "Transportation", "description": "Getting around", "route": "/services/transportation"},
    {"id": "simCards", "name": "SIM Cards", "description": "Connectivity services", "route": "/services/simCards"},
    {"id": "guides", "name": "Guides", "description": "Tour guide services", "route": "/services/guides"},
]
