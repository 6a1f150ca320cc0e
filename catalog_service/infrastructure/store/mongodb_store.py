from typing import Any, Dict, List, Optional
import time
import uuid

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from catalog_service.config import Settings
from catalog_service.domain.interfaces.store_interface import (
    DocumentStore,
    QUERY_OPERATORS,
    StoredDocument
)
from catalog_service.utils.exceptions import (
    DocumentNotFoundError,
    StoreError,
    ValidationException
)
from catalog_service.utils.logger import get_logger
from catalog_service.utils.paths import collection_parts, document_parts, normalize_path

logger = get_logger(__name__)

# Bookkeeping fields added to every stored document
ID_FIELD = "_id"
PARENT_FIELD = "_parent"
RESERVED_FIELDS = (ID_FIELD, PARENT_FIELD)

_OPERATOR_MAP = {
    "!=": "$ne",
    "<": "$lt",
    "<=": "$lte",
    ">": "$gt",
    ">=": "$gte",
    "in": "$in",
}


class MongoDocumentStore(DocumentStore):
    """
    MongoDB implementation of the DocumentStore interface.

    A hierarchical collection path such as ``services/hotels/items`` maps to
    the Mongo collection named after its leaf (``items``). Each document is
    keyed by its full path in ``_id`` and scoped by ``_parent``, the path of
    the document that owns the collection (``services/hotels``), or ``""``
    at the root.
    """

    def __init__(self, client: AsyncMongoClient, database_name: str):
        """
        Initialize the store.

        Args:
            client: Async MongoDB client (connects lazily)
            database_name: Name of the database holding every collection
        """
        self.client = client
        self.database_name = database_name
        self.database = client[database_name]
        logger.info(
            f"Initialized MongoDB document store for {database_name}",
            extra={"database_name": database_name}
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoDocumentStore":
        """
        Build a store from application settings.

        Args:
            settings: Application settings

        Returns:
            MongoDocumentStore bound to ``MONGODB_DATABASE``
        """
        client = AsyncMongoClient(
            settings.MONGODB_URL,
            connectTimeoutMS=settings.STORE_TIMEOUT_MS,
            serverSelectionTimeoutMS=settings.STORE_TIMEOUT_MS,
            appname=settings.SERVICE_NAME
        )
        return cls(client, settings.MONGODB_DATABASE)

    def _scope(self, collection_path: str):
        """Return the Mongo collection and parent filter for a collection path."""
        parent, name = collection_parts(collection_path)
        return self.database[name], parent

    @staticmethod
    def _check_fields(data: Dict[str, Any]) -> None:
        clashing = [key for key in RESERVED_FIELDS if key in data]
        if clashing:
            raise ValidationException(
                message="Document data uses reserved field names",
                details={"fields": clashing}
            )

    @classmethod
    def _to_document(cls, document_path: str, parent: str, data: Dict[str, Any]) -> Dict[str, Any]:
        cls._check_fields(data)
        return {ID_FIELD: document_path, PARENT_FIELD: parent, **data}

    @staticmethod
    def _to_stored(document: Dict[str, Any]) -> StoredDocument:
        path = str(document.pop(ID_FIELD))
        document.pop(PARENT_FIELD, None)
        return StoredDocument(id=path.rsplit("/", 1)[-1], path=path, data=document)

    @staticmethod
    def _build_filter(field_name: str, op: str, value: Any) -> Dict[str, Any]:
        if op == "==":
            return {field_name: value}
        if op == "array-contains":
            return {field_name: {"$elemMatch": {"$eq": value}}}
        if op in _OPERATOR_MAP:
            if op == "in" and not isinstance(value, (list, tuple, set)):
                raise ValidationException(
                    message="The 'in' operator needs a list of values",
                    details={"field": field_name}
                )
            operand = list(value) if op == "in" else value
            return {field_name: {_OPERATOR_MAP[op]: operand}}
        raise ValidationException(
            message=f"Unsupported query operator: '{op}'",
            details={"operator": op, "supported": list(QUERY_OPERATORS)}
        )

    async def create_document(self, collection_path: str, data: Dict[str, Any]) -> str:
        collection, parent = self._scope(collection_path)
        document_id = uuid.uuid4().hex
        document_path = f"{normalize_path(collection_path)}/{document_id}"
        document = self._to_document(document_path, parent, data)
        try:
            result = await collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Failed to create document in {collection_path}: {str(e)}")
            raise StoreError(f"Failed to create document: {str(e)}", path=collection_path)

        if not result.acknowledged:
            raise StoreError("Failed to create document: operation not acknowledged", path=collection_path)

        logger.debug(f"Created document {collection_path}/{document_id}")
        return document_id

    async def set_document(self, document_path: str, data: Dict[str, Any]) -> str:
        collection_path, document_id = document_parts(document_path)
        collection, parent = self._scope(collection_path)
        path = normalize_path(document_path)
        document = self._to_document(path, parent, data)
        try:
            await collection.replace_one(
                {ID_FIELD: path},
                document,
                upsert=True
            )
        except PyMongoError as e:
            logger.error(f"Failed to set document {document_path}: {str(e)}")
            raise StoreError(f"Failed to set document: {str(e)}", path=document_path)

        logger.debug(f"Set document {document_path}")
        return document_id

    async def get_document(self, document_path: str) -> Optional[StoredDocument]:
        collection_path, _ = document_parts(document_path)
        collection, _ = self._scope(collection_path)
        try:
            document = await collection.find_one({ID_FIELD: normalize_path(document_path)})
        except PyMongoError as e:
            logger.error(f"Failed to read document {document_path}: {str(e)}")
            raise StoreError(f"Failed to read document: {str(e)}", path=document_path)

        if document is None:
            return None
        return self._to_stored(document)

    async def _find(self, collection_path: str, query_filter: Dict[str, Any]) -> List[StoredDocument]:
        collection, parent = self._scope(collection_path)
        try:
            cursor = collection.find({PARENT_FIELD: parent, **query_filter})
            documents = await cursor.to_list(None)
        except PyMongoError as e:
            logger.error(f"Failed to read collection {collection_path}: {str(e)}")
            raise StoreError(f"Failed to read collection: {str(e)}", path=collection_path)

        return [self._to_stored(document) for document in documents]

    async def list_documents(self, collection_path: str) -> List[StoredDocument]:
        return await self._find(collection_path, {})

    async def query_documents(
        self,
        collection_path: str,
        field_name: str,
        op: str,
        value: Any
    ) -> List[StoredDocument]:
        if field_name in RESERVED_FIELDS:
            raise ValidationException(
                message=f"Cannot query on reserved field '{field_name}'",
                details={"field": field_name}
            )
        return await self._find(collection_path, self._build_filter(field_name, op, value))

    async def update_document(self, document_path: str, data: Dict[str, Any]) -> bool:
        collection_path, _ = document_parts(document_path)
        collection, _ = self._scope(collection_path)
        self._check_fields(data)
        try:
            result = await collection.update_one(
                {ID_FIELD: normalize_path(document_path)},
                {"$set": data}
            )
        except PyMongoError as e:
            logger.error(f"Failed to update document {document_path}: {str(e)}")
            raise StoreError(f"Failed to update document: {str(e)}", path=document_path)

        if result.matched_count == 0:
            logger.info(f"Document not found for update: {document_path}")
            raise DocumentNotFoundError(document_path)

        logger.debug(
            f"Updated document {document_path}",
            extra={
                "modified_count": result.modified_count,
                "fields_updated": list(data.keys())
            }
        )
        return True

    async def delete_document(self, document_path: str) -> bool:
        collection_path, _ = document_parts(document_path)
        collection, _ = self._scope(collection_path)
        try:
            result = await collection.delete_one({ID_FIELD: normalize_path(document_path)})
        except PyMongoError as e:
            logger.error(f"Failed to delete document {document_path}: {str(e)}")
            raise StoreError(f"Failed to delete document: {str(e)}", path=document_path)

        logger.debug(f"Deleted document {document_path}", extra={"deleted_count": result.deleted_count})
        return result.deleted_count > 0

    async def health_check(self) -> Dict[str, Any]:
        start = time.time()
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.warning(f"MongoDB health check failed: {str(e)}")
            return {
                "status": "error",
                "backend": "mongodb",
                "message": str(e)
            }

        return {
            "status": "ok",
            "backend": "mongodb",
            "database": self.database_name,
            "latency_ms": round((time.time() - start) * 1000, 2)
        }

    async def close(self) -> None:
        await self.client.close()
        logger.info("Closed MongoDB document store")
