import os

# Settings are read at import time by several modules
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-catalog-service-tests")
os.environ["STORE_BACKEND"] = "memory"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient

from catalog_service.domain.services.auth_service import AuthService
from catalog_service.domain.services.service_resolver import ServiceResolver
from catalog_service.infrastructure.repositories.item_repository import ItemRepository
from catalog_service.infrastructure.repositories.service_repository import ServiceRepository
from catalog_service.infrastructure.store.memory_store import InMemoryDocumentStore


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def resolver(store):
    return ServiceResolver(store)


@pytest.fixture
def item_repository(store):
    return ItemRepository(store)


@pytest.fixture
def service_repository(store):
    return ServiceRepository(store)


@pytest.fixture
def auth_service(store):
    return AuthService(
        store,
        secret_key="test-secret-key-for-catalog-service-tests",
        token_expire_minutes=5
    )


@pytest.fixture
async def admin_session(auth_service):
    await auth_service.sign_up("admin@example.com", "secret123", "Admin User", is_admin=True)
    session, _ = await auth_service.sign_in("admin@example.com", "secret123")
    return session


@pytest.fixture
async def user_session(auth_service):
    await auth_service.sign_up("user@example.com", "secret123", "Regular User")
    session, _ = await auth_service.sign_in("user@example.com", "secret123")
    return session


@pytest.fixture
async def app():
    from catalog_service.main import create_application

    application = create_application()
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as async_client:
        yield async_client
