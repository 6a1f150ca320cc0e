from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from catalog_service.domain.interfaces.store_interface import StoredDocument


class CatalogItem(BaseModel):
    """
    One offering nested under a service record.

    Known attributes are typed; any other stored field (for example an
    attribute written under a different category) is kept as an extra field
    so reads never lose data.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True
    )

    item_id: str
    title: str = ""
    description: str = ""
    image_url: Optional[str] = None
    price: Optional[str] = None
    location: Optional[str] = None
    cuisine_type: Optional[str] = None
    price_range: Optional[str] = None
    provider: Optional[str] = None
    data_amount: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @classmethod
    def from_document(cls, document: StoredDocument) -> "CatalogItem":
        data = {k: v for k, v in document.data.items() if k != "itemId"}
        return cls(item_id=document.id, **data)

    def merged(self, fields: Dict[str, Any]) -> "CatalogItem":
        """Copy of this item with stored-form fields applied on top."""
        data = self.model_dump(by_alias=True)
        data.update(fields)
        data.pop("itemId", None)
        return CatalogItem(item_id=self.item_id, **data)

    def to_document(self) -> Dict[str, Any]:
        """Stored representation without the identifier."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"item_id"})
