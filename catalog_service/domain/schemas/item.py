from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog_service.domain.models.catalog_item import CatalogItem


class ItemWrite(BaseModel):
    """
    Schema for creating or updating a catalog item.

    Title and description are checked by the repository so that a missing
    value produces the same validation error on every entry point.
    Category attributes (``price``, ``cuisineType``, ...) are passed through
    as extra fields and filtered against the service category.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        json_schema_extra={
            "example": {
                "title": "Grand Hotel",
                "description": "Nice place",
                "price": "120",
                "location": "Paris"
            }
        }
    )

    title: Optional[str] = Field(None, description="Item title")
    description: Optional[str] = Field(None, description="Item description")
    image_url: Optional[str] = Field(None, description="Image URL")

    def fields(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ItemListResponse(BaseModel):
    """Schema for the items of a service"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    service_key: str = Field(..., description="Requested service key")
    record_id: str = Field(..., description="Resolved service record identifier")
    items: List[CatalogItem] = Field(..., description="Items in store order")
    total: int = Field(..., description="Number of items")
