"""
Schema package for Pydantic models used in API request/response validation.
This file exports all schema classes for easier importing elsewhere.
"""

# Auth schemas
from catalog_service.domain.schemas.auth import (
    SignUpRequest,
    SignInRequest,
    SessionResponse,
    TokenResponse
)

# Service schemas
from catalog_service.domain.schemas.service import (
    ServiceWrite,
    ServiceCreate,
    ServiceListResponse,
    ResolveResponse,
    DeleteResponse
)

# Item schemas
from catalog_service.domain.schemas.item import ItemWrite, ItemListResponse

# User schemas
from catalog_service.domain.schemas.user import (
    AdminStatusUpdate,
    UserListResponse,
    StatisticsResponse
)

__all__ = [
    "SignUpRequest",
    "SignInRequest",
    "SessionResponse",
    "TokenResponse",
    "ServiceWrite",
    "ServiceCreate",
    "ServiceListResponse",
    "ResolveResponse",
    "DeleteResponse",
    "ItemWrite",
    "ItemListResponse",
    "AdminStatusUpdate",
    "UserListResponse",
    "StatisticsResponse",
]
