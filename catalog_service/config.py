from functools import lru_cache
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import os
from dotenv import load_dotenv


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Service information
    SERVICE_NAME: str = "catalog-service"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # FastAPI configuration
    API_PREFIX: str = "/api/v1"
    DEBUG: bool = False

    # Document store configuration
    STORE_BACKEND: str = "mongodb"
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "travel_catalog"
    STORE_TIMEOUT_MS: int = 10000

    # Collection names
    SERVICES_COLLECTION: str = "services"
    ITEMS_COLLECTION: str = "items"
    USERS_COLLECTION: str = "users"
    SESSIONS_COLLECTION: str = "sessions"

    # Authentication
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Logging configuration
    LOG_LEVEL: str = "INFO"

    # Raise on ambiguous service keys instead of taking the first match
    RESOLVER_STRICT: bool = False

    @field_validator("MONGODB_URL")
    @classmethod
    def validate_mongodb_url(cls, v: str) -> str:
        """Validate that the MongoDB URL is properly formatted."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MONGODB_URL must be a valid MongoDB connection string")
        return v

    @field_validator("STORE_BACKEND")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Validate the configured document store backend."""
        backend = v.strip().lower()
        if backend not in ("mongodb", "memory"):
            raise ValueError("STORE_BACKEND must be 'mongodb' or 'memory'")
        return backend


def load_env_file() -> None:
    """Load environment variables from .env file if it exists."""
    env_path = os.path.join(os.getcwd(), ".env")
    if os.path.exists(env_path):
        load_dotenv(dotenv_path=env_path)


@lru_cache
def get_settings() -> Settings:
    """
    Create and cache application settings.

    Returns:
        Settings: Application settings instance
    """
    load_env_file()
    return Settings()
