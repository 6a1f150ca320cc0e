"""
Service key resolution.

Admin screens and customer screens address a service category by a short key
such as ``hotels``. Records in the ``services`` collection have been written
by more than one code path over time: some carry the key as their store
identifier, some have a store-assigned identifier and keep the key in their
``id`` attribute, and some only have a display name. ``ServiceResolver``
applies one canonical policy to map a key onto exactly one record, in this
fixed order:

1. a record whose ``id`` attribute equals the key
2. a record whose store identifier is the key
3. the first record whose identifier, ``id`` attribute or name
   (case-insensitive) matches the key
4. otherwise, create ``services/{key}`` with ``id=key`` and a title-cased name

Resolution is not cached and no lock spans steps 1-4: two sessions resolving
the same unseen key at the same time may both reach step 4. Both write the
same path, so the last write wins.
"""

from typing import List, Optional

from catalog_service.domain.interfaces.store_interface import DocumentStore, StoredDocument
from catalog_service.domain.models.service_record import (
    ServiceRecord,
    document_matches_key,
    title_from_key
)
from catalog_service.utils.exceptions import (
    AmbiguousResolutionError,
    NotFoundException,
    ValidationException
)
from catalog_service.utils.logger import get_logger
from catalog_service.utils.paths import join_path
from catalog_service.utils.timestamps import utc_now_iso

logger = get_logger(__name__)


class ServiceResolver:
    """Resolves service keys to canonical service record identifiers."""

    def __init__(
        self,
        store: DocumentStore,
        services_collection: str = "services",
        strict: bool = False
    ):
        """
        Initialize the resolver.

        Args:
            store: Document store holding the service records
            services_collection: Name of the root collection of service records
            strict: Raise AmbiguousResolutionError when several records carry the
                key in their ``id`` attribute, instead of taking the first one
        """
        self.store = store
        self.services_collection = services_collection
        self.strict = strict

    @staticmethod
    def validate_key(service_key: str) -> str:
        if not isinstance(service_key, str) or not service_key.strip():
            raise ValidationException(
                message="Service key is required",
                details={"field": "service_key"}
            )
        if "/" in service_key:
            raise ValidationException(
                message="Service key cannot contain '/'",
                details={"field": "service_key", "value": service_key}
            )
        return service_key

    async def lookup(self, service_key: str) -> Optional[str]:
        """
        Find the record for a service key without creating one (steps 1-3).

        Returns:
            Identifier of the matching record, or None

        Raises:
            ValidationException: If the key is blank or contains ``/``
            AmbiguousResolutionError: In strict mode, if the key is ambiguous
            StoreError: If any store round trip fails
        """
        self.validate_key(service_key)
        logger.debug(f"Looking up service key: {service_key}")

        # Step 1: the record's own "id" attribute
        by_id_field = await self.store.query_documents(
            self.services_collection, "id", "==", service_key
        )
        if by_id_field:
            record_id = self._pick(service_key, by_id_field)
            logger.debug(f"Resolved {service_key} by 'id' field: {record_id}")
            return record_id

        # Step 2: the key is the store identifier
        direct = await self.store.get_document(join_path(self.services_collection, service_key))
        if direct is not None:
            logger.debug(f"Resolved {service_key} by document identifier")
            return direct.id

        # Step 3: scan identifiers, "id" attributes and names
        for document in await self.store.list_documents(self.services_collection):
            if document_matches_key(document, service_key):
                logger.debug(f"Resolved {service_key} by scan: {document.id}")
                return document.id

        return None

    async def resolve(self, service_key: str) -> str:
        """
        Resolve a service key to a record identifier, creating the record if absent.

        Args:
            service_key: Caller-supplied key, e.g. ``hotels``

        Returns:
            Identifier of the canonical service record

        Raises:
            ValidationException: If the key is blank or contains ``/``
            AmbiguousResolutionError: In strict mode, if the key is ambiguous
            StoreError: If any store round trip fails
        """
        record_id = await self.lookup(service_key)
        if record_id is not None:
            return record_id

        # Step 4: nothing matched, create the record under the key itself
        record = {
            "id": service_key,
            "name": title_from_key(service_key),
            "createdAt": utc_now_iso()
        }
        record_id = await self.store.set_document(
            join_path(self.services_collection, service_key), record
        )
        logger.info(
            f"Created service record for key {service_key}",
            extra={"record_id": record_id}
        )
        return record_id

    def _pick(self, service_key: str, candidates: List[StoredDocument]) -> str:
        if len(candidates) == 1:
            return candidates[0].id

        candidate_ids = [document.id for document in candidates]
        if self.strict:
            raise AmbiguousResolutionError(service_key, candidate_ids)

        logger.warning(
            f"Service key {service_key} matches {len(candidates)} records, using the first",
            extra={"service_key": service_key, "candidates": candidate_ids}
        )
        return candidate_ids[0]

    async def get_record(self, record_id: str) -> ServiceRecord:
        """
        Load a resolved service record.

        Raises:
            NotFoundException: If the record no longer exists
        """
        document = await self.store.get_document(join_path(self.services_collection, record_id))
        if document is None:
            raise NotFoundException("Service", record_id)
        return ServiceRecord.from_document(document)
