from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog_service.domain.models.service_record import ServiceRecord


class ServiceWrite(BaseModel):
    """Schema for creating or updating a service record"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = Field(None, description="Display name")
    description: Optional[str] = Field(None, description="Short description")
    route: Optional[str] = Field(None, description="Customer screen route, e.g. /services/hotels")


class ServiceCreate(ServiceWrite):
    """Schema for creating a service record"""
    key: Optional[str] = Field(
        None,
        description="Service key stored in the record's id attribute; derived from the route when omitted"
    )


class ServiceListResponse(BaseModel):
    """Schema for the service list"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: List[ServiceRecord] = Field(..., description="Service records")
    persisted: bool = Field(..., description="False when showing the predefined types of an empty store")


class ResolveResponse(BaseModel):
    """Schema for a resolved service key"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    service_key: str = Field(..., description="Key that was resolved")
    record_id: str = Field(..., description="Canonical service record identifier")
    category: Optional[str] = Field(None, description="Predefined category of the key, if any")


class DeleteResponse(BaseModel):
    """Schema for a delete outcome"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    record_id: str = Field(..., description="Identifier that was deleted")
    removed: bool = Field(..., description="Whether a record existed")
