"""
Domain interfaces package.

Abstract collaborators the domain depends on; infrastructure provides the
implementations.
"""

from catalog_service.domain.interfaces.store_interface import (
    DocumentStore,
    StoredDocument,
    QUERY_OPERATORS
)

__all__ = ["DocumentStore", "StoredDocument", "QUERY_OPERATORS"]
