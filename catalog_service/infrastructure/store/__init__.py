"""Document store implementations backing the catalog."""

from catalog_service.infrastructure.store.memory_store import InMemoryDocumentStore
from catalog_service.infrastructure.store.mongodb_store import MongoDocumentStore
from catalog_service.infrastructure.store.factory import create_store

__all__ = ["InMemoryDocumentStore", "MongoDocumentStore", "create_store"]
