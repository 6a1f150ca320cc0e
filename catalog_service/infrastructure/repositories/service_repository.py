"""Service record repository - admin management of the services collection."""

from typing import Any, Dict, List, Optional, Tuple

from catalog_service.domain.interfaces.store_interface import DocumentStore
from catalog_service.domain.models.service_record import DEFAULT_SERVICES, ServiceRecord
from catalog_service.utils.exceptions import ConflictException, NotFoundException, ValidationException
from catalog_service.utils.logger import get_logger
from catalog_service.utils.paths import join_path
from catalog_service.utils.timestamps import utc_now_iso

logger = get_logger(__name__)

ROUTE_PREFIX = "/services/"


def key_from_route(route: str) -> Optional[str]:
    """Service key encoded in a ``/services/<key>`` route, if any."""
    if route.startswith(ROUTE_PREFIX):
        key = route[len(ROUTE_PREFIX):].strip("/")
        if key and "/" not in key:
            return key
    return None


class ServiceRepository:
    """Manages service records: listing, seeding, create, update and delete."""

    def __init__(self, store: DocumentStore, services_collection: str = "services"):
        self.store = store
        self.services_collection = services_collection

    def _record_path(self, record_id: str) -> str:
        return join_path(self.services_collection, record_id)

    @staticmethod
    def _validate(name: Any, description: Any, route: Any) -> Dict[str, str]:
        values = {
            "name": str(name or "").strip(),
            "description": str(description or "").strip(),
            "route": str(route or "").strip(),
        }
        missing = [field for field, value in values.items() if not value]
        if missing:
            raise ValidationException(
                message="Please fill in all fields",
                details={"missing": missing}
            )
        return values

    async def list_services(self) -> Tuple[List[ServiceRecord], bool]:
        """
        List service records.

        Returns:
            (records, persisted); when the collection is empty the predefined
            service types are returned with ``persisted`` set to False
        """
        documents = await self.store.list_documents(self.services_collection)
        if not documents:
            logger.info("No services found, using predefined types")
            return [ServiceRecord(record_id=service["id"], **service) for service in DEFAULT_SERVICES], False

        return [ServiceRecord.from_document(document) for document in documents], True

    async def get_service(self, record_id: str) -> ServiceRecord:
        document = await self.store.get_document(self._record_path(record_id))
        if document is None:
            raise NotFoundException("Service", record_id)
        return ServiceRecord.from_document(document)

    async def initialize_default_services(self) -> List[ServiceRecord]:
        """
        Seed the predefined service types.

        Each record gets a store-assigned identifier and keeps its key in the
        ``id`` attribute, which is what the resolver looks at first.

        Raises:
            ConflictException: If any service record already exists
        """
        existing = await self.store.list_documents(self.services_collection)
        if existing:
            raise ConflictException(
                message="Fixed services are already initialized",
                details={"existing": len(existing)}
            )

        records = []
        for service in DEFAULT_SERVICES:
            data = {**service, "createdAt": utc_now_iso()}
            record_id = await self.store.create_document(self.services_collection, data)
            records.append(ServiceRecord(record_id=record_id, **data))
            logger.info(f"Service {service['name']} added", extra={"record_id": record_id})

        return records

    async def create_service(
        self,
        name: str,
        description: str,
        route: str,
        key: Optional[str] = None
    ) -> ServiceRecord:
        """
        Create a service record with a store-assigned identifier.

        The ``id`` attribute is set to ``key`` or, failing that, to the key
        encoded in a ``/services/<key>`` route, so the record resolves by key.

        Raises:
            ValidationException: If name, description or route is blank
        """
        data: Dict[str, Any] = self._validate(name, description, route)
        service_key = key or key_from_route(data["route"])
        if service_key:
            data["id"] = service_key
        data["createdAt"] = utc_now_iso()

        record_id = await self.store.create_document(self.services_collection, data)
        logger.info(f"Created service {data['name']}", extra={"record_id": record_id})
        return ServiceRecord(record_id=record_id, **data)

    async def update_service(
        self,
        record_id: str,
        name: str,
        description: str,
        route: str
    ) -> ServiceRecord:
        """
        Update a service record's name, description and route.

        Raises:
            ValidationException: If a field is blank
            DocumentNotFoundError: If the record does not exist
        """
        data: Dict[str, Any] = self._validate(name, description, route)
        data["updatedAt"] = utc_now_iso()

        await self.store.update_document(self._record_path(record_id), data)
        logger.info(f"Updated service {record_id}", extra={"fields_updated": list(data.keys())})
        return await self.get_service(record_id)

    async def delete_service(self, record_id: str) -> bool:
        """
        Delete a service record. Its items sub-collection is not cascaded.

        Returns:
            True if a record was removed
        """
        removed = await self.store.delete_document(self._record_path(record_id))
        logger.info(f"Deleted service {record_id}", extra={"removed": removed})
        return removed
