from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Comparison operators accepted by ``query_documents``
QUERY_OPERATORS = ("==", "!=", "<", "<=", ">", ">=", "in", "array-contains")


@dataclass
class StoredDocument:
    """A document read back from the store: its identifier, full path and fields."""
    id: str
    path: str
    data: Dict[str, Any] = field(default_factory=dict)


class DocumentStore(ABC):
    """
    Generic async document store keyed by hierarchical collection paths.

    Records live at ``services/{recordId}``, their items at
    ``services/{recordId}/items/{itemId}``. Implementations surface every
    backend failure as ``StoreError`` and never retry.
    """

    @abstractmethod
    async def create_document(self, collection_path: str, data: Dict[str, Any]) -> str:
        """
        Creates a document with a store-assigned identifier.

        Args:
            collection_path: Collection to create the document in
            data: Fields of the new document

        Returns:
            The identifier assigned to the new document

        Raises:
            StoreError: If the write fails
        """
        pass

    @abstractmethod
    async def set_document(self, document_path: str, data: Dict[str, Any]) -> str:
        """
        Creates or replaces the document at a known path.

        Args:
            document_path: Full path of the document
            data: Complete set of fields to store

        Returns:
            The document identifier (last path segment)

        Raises:
            StoreError: If the write fails
        """
        pass

    @abstractmethod
    async def get_document(self, document_path: str) -> Optional[StoredDocument]:
        """
        Reads a single document.

        Returns:
            The document, or None when nothing is stored at the path

        Raises:
            StoreError: If the read fails
        """
        pass

    @abstractmethod
    async def list_documents(self, collection_path: str) -> List[StoredDocument]:
        """
        Reads every document of a collection. An empty collection yields an empty list.

        Raises:
            StoreError: If the read fails
        """
        pass

    @abstractmethod
    async def query_documents(
        self,
        collection_path: str,
        field_name: str,
        op: str,
        value: Any
    ) -> List[StoredDocument]:
        """
        Reads the documents of a collection whose field satisfies ``op value``.

        Args:
            collection_path: Collection to query
            field_name: Stored field to compare
            op: One of ``QUERY_OPERATORS``
            value: Right-hand operand

        Returns:
            Matching documents in the store's natural order

        Raises:
            ValidationException: If the operator is not supported
            StoreError: If the read fails
        """
        pass

    @abstractmethod
    async def update_document(self, document_path: str, data: Dict[str, Any]) -> bool:
        """
        Merges fields into an existing document; fields not supplied are kept.

        Returns:
            True once the update is applied

        Raises:
            DocumentNotFoundError: If no document exists at the path
            StoreError: If the write fails
        """
        pass

    @abstractmethod
    async def delete_document(self, document_path: str) -> bool:
        """
        Removes a document unconditionally. Nested collections are left alone.

        Returns:
            True if a document was removed, False if the path was already empty

        Raises:
            StoreError: If the delete fails
        """
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """
        Checks that the store is reachable.

        Returns:
            Dictionary with ``status`` and backend details
        """
        pass

    async def close(self) -> None:
        """Releases backend resources."""
        return None
