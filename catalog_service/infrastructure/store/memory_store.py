import copy
import uuid
from typing import Any, Callable, Dict, List, Optional

from catalog_service.domain.interfaces.store_interface import (
    DocumentStore,
    QUERY_OPERATORS,
    StoredDocument
)
from catalog_service.utils.exceptions import DocumentNotFoundError, ValidationException
from catalog_service.utils.logger import get_logger
from catalog_service.utils.paths import collection_parts, document_parts, normalize_path

logger = get_logger(__name__)


def _array_contains(stored: Any, value: Any) -> bool:
    return isinstance(stored, (list, tuple)) and value in stored


_MATCHERS: Dict[str, Callable[[Any, Any], bool]] = {
    "==": lambda stored, value: stored == value,
    "!=": lambda stored, value: stored != value,
    "<": lambda stored, value: stored < value,
    "<=": lambda stored, value: stored <= value,
    ">": lambda stored, value: stored > value,
    ">=": lambda stored, value: stored >= value,
    "in": lambda stored, value: stored in value,
    "array-contains": _array_contains,
}


class InMemoryDocumentStore(DocumentStore):
    """In-memory implementation of the DocumentStore interface."""

    def __init__(self):
        # collection path -> {document id -> fields}; insertion order is the natural order
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        logger.info("In-memory document store initialized")

    def _collection(self, collection_path: str) -> Dict[str, Dict[str, Any]]:
        parent, name = collection_parts(collection_path)
        key = f"{parent}/{name}" if parent else name
        return self._collections.setdefault(key, {})

    @staticmethod
    def _snapshot(collection_path: str, document_id: str, data: Dict[str, Any]) -> StoredDocument:
        return StoredDocument(
            id=document_id,
            path=f"{normalize_path(collection_path)}/{document_id}",
            data=copy.deepcopy(data)
        )

    async def create_document(self, collection_path: str, data: Dict[str, Any]) -> str:
        collection = self._collection(collection_path)
        document_id = uuid.uuid4().hex
        collection[document_id] = copy.deepcopy(data)
        logger.debug(f"Created document {collection_path}/{document_id}")
        return document_id

    async def set_document(self, document_path: str, data: Dict[str, Any]) -> str:
        collection_path, document_id = document_parts(document_path)
        self._collection(collection_path)[document_id] = copy.deepcopy(data)
        logger.debug(f"Set document {document_path}")
        return document_id

    async def get_document(self, document_path: str) -> Optional[StoredDocument]:
        collection_path, document_id = document_parts(document_path)
        data = self._collection(collection_path).get(document_id)
        if data is None:
            return None
        return self._snapshot(collection_path, document_id, data)

    async def list_documents(self, collection_path: str) -> List[StoredDocument]:
        collection = self._collection(collection_path)
        return [
            self._snapshot(collection_path, document_id, data)
            for document_id, data in collection.items()
        ]

    async def query_documents(
        self,
        collection_path: str,
        field_name: str,
        op: str,
        value: Any
    ) -> List[StoredDocument]:
        matcher = _MATCHERS.get(op)
        if matcher is None:
            raise ValidationException(
                message=f"Unsupported query operator: '{op}'",
                details={"operator": op, "supported": list(QUERY_OPERATORS)}
            )

        results = []
        for document_id, data in self._collection(collection_path).items():
            if field_name not in data:
                continue
            try:
                matched = matcher(data[field_name], value)
            except TypeError:
                # Mismatched types never satisfy an ordering comparison
                matched = False
            if matched:
                results.append(self._snapshot(collection_path, document_id, data))
        return results

    async def update_document(self, document_path: str, data: Dict[str, Any]) -> bool:
        collection_path, document_id = document_parts(document_path)
        collection = self._collection(collection_path)
        if document_id not in collection:
            raise DocumentNotFoundError(document_path)
        collection[document_id].update(copy.deepcopy(data))
        logger.debug(f"Updated document {document_path}", extra={"fields_updated": list(data.keys())})
        return True

    async def delete_document(self, document_path: str) -> bool:
        collection_path, document_id = document_parts(document_path)
        removed = self._collection(collection_path).pop(document_id, None) is not None
        logger.debug(f"Deleted document {document_path}", extra={"removed": removed})
        return removed

    async def health_check(self) -> Dict[str, Any]:
        return {
            "status": "ok",
            "backend": "memory",
            "collections": len(self._collections)
        }
