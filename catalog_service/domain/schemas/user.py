from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog_service.domain.models.user import UserAccount


class AdminStatusUpdate(BaseModel):
    """Schema for granting or revoking admin rights"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_admin: bool = Field(..., description="New admin flag")


class UserListResponse(BaseModel):
    """Schema for user list responses"""
    items: List[UserAccount] = Field(..., description="Registered users")
    total: int = Field(..., description="Total number of users")


class StatisticsResponse(BaseModel):
    """Schema for the admin dashboard statistics"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_users: int = Field(..., description="Number of registered users")
    recent_users: int = Field(..., description="Users created in the last seven days")
