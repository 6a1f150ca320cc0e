from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AuthSchema(BaseModel):
    """Base schema: camelCase on the wire, snake_case accepted as well."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SignUpRequest(AuthSchema):
    """Schema for registering a user"""
    email: str = Field(..., description="Login email address")
    password: str = Field(..., description="Password, at least six characters")
    full_name: str = Field(..., description="Display name")


class SignInRequest(AuthSchema):
    """Schema for signing in"""
    email: str = Field(..., description="Login email address")
    password: str = Field(..., description="Password")


class SessionResponse(AuthSchema):
    """Schema for the signed-in session"""
    session_id: str = Field(..., description="Session identifier")
    user_id: str = Field(..., description="User identifier")
    email: str = Field(..., description="Login email address")
    full_name: Optional[str] = Field(None, description="Display name")
    is_admin: bool = Field(False, description="Whether the user may use the admin panel")


class TokenResponse(AuthSchema):
    """Schema for a successful sign-in"""
    access_token: str = Field(..., description="Bearer token referring to the session")
    token_type: str = Field("bearer", description="Token type")
    session: SessionResponse = Field(..., description="The opened session")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "accessToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "tokenType": "bearer",
                "session": {
                    "sessionId": "6f1c0a3e9b5d4f2a8c7e1b0d9a3f5e2c",
                    "userId": "0b6f4d2a9c8e4b1f8a3d5c7e9f1a2b3c",
                    "email": "admin@example.com",
                    "fullName": "Admin User",
                    "isAdmin": True
                }
            }
        }
    )
