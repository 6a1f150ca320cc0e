from catalog_service.config import Settings
from catalog_service.domain.interfaces.store_interface import DocumentStore
from catalog_service.infrastructure.store.memory_store import InMemoryDocumentStore
from catalog_service.infrastructure.store.mongodb_store import MongoDocumentStore
from catalog_service.utils.logger import get_logger

logger = get_logger(__name__)


def create_store(settings: Settings) -> DocumentStore:
    """
    Create the document store selected by ``STORE_BACKEND``.

    Args:
        settings: Application settings

    Returns:
        DocumentStore: MongoDB-backed store, or the in-memory store for local runs
    """
    if settings.STORE_BACKEND == "memory":
        logger.warning("Using in-memory document store; data is lost on restart")
        return InMemoryDocumentStore()

    return MongoDocumentStore.from_settings(settings)
