from typing import Any, Dict, List, Mapping, Optional

from catalog_service.domain.interfaces.store_interface import DocumentStore
from catalog_service.domain.models.catalog_item import CatalogItem
from catalog_service.domain.models.category import ServiceCategory, attributes_model_for
from catalog_service.utils.exceptions import NotFoundException, ValidationException
from catalog_service.utils.logger import get_logger
from catalog_service.utils.paths import join_path
from catalog_service.utils.timestamps import utc_now_iso

logger = get_logger(__name__)

REQUIRED_FIELDS = ("title", "description")


class ItemRepository:
    """
    Repository for catalog items nested under a resolved service record.

    Items live at ``services/{recordId}/items/{itemId}``. Writes are filtered
    by the service category: only the title, the description, the image URL
    and the category's own attributes are persisted. Updates merge into the
    stored item, so attributes already stored are never removed.
    """

    def __init__(
        self,
        store: DocumentStore,
        services_collection: str = "services",
        items_collection: str = "items"
    ):
        """
        Initialize the item repository.

        Args:
            store: Document store instance
            services_collection: Root collection of service records
            items_collection: Name of the item sub-collection of each record
        """
        self.store = store
        self.services_collection = services_collection
        self.items_collection = items_collection

    def _items_path(self, record_id: str) -> str:
        return join_path(self.services_collection, record_id, self.items_collection)

    def _item_path(self, record_id: str, item_id: str) -> str:
        return join_path(self.services_collection, record_id, self.items_collection, item_id)

    @staticmethod
    def build_fields(
        fields: Mapping[str, Any],
        category: Optional[ServiceCategory],
        partial: bool = False
    ) -> Dict[str, Any]:
        """
        Validate item input and keep the fields the category recognises.

        Args:
            fields: Raw input, in stored (camelCase) or Python (snake_case) names
            category: Category of the owning service record
            partial: Only check the required fields that are present in ``fields``

        Returns:
            Stored-form fields: the supplied required fields and non-blank
            recognised attributes

        Raises:
            ValidationException: If title or description is blank, or missing
                when ``partial`` is False
        """
        checked = [name for name in REQUIRED_FIELDS if not partial or name in fields]
        values = {name: str(fields.get(name) or "").strip() for name in checked}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ValidationException(
                message="Please fill in all required fields",
                details={"missing": missing}
            )

        attributes_model = attributes_model_for(category)
        attributes = attributes_model.model_validate(
            {k: v for k, v in fields.items() if k in attributes_model.accepted_keys()}
        )

        dropped = sorted(
            k for k in fields
            if k not in REQUIRED_FIELDS and k not in attributes_model.accepted_keys()
        )
        if dropped:
            logger.debug(
                "Dropping fields not recognised for this category",
                extra={"category": category.value if category else None, "dropped": dropped}
            )

        return {**values, **attributes.to_document()}

    async def list(self, record_id: str) -> List[CatalogItem]:
        """
        Fetch every item of a service record.

        Returns:
            Items in store order; an empty list when the record has none

        Raises:
            StoreError: If the read fails
        """
        documents = await self.store.list_documents(self._items_path(record_id))
        logger.debug(f"Found {len(documents)} items", extra={"record_id": record_id})
        return [CatalogItem.from_document(document) for document in documents]

    async def get(self, record_id: str, item_id: str) -> CatalogItem:
        document = await self.store.get_document(self._item_path(record_id, item_id))
        if document is None:
            raise NotFoundException("Item", item_id)
        return CatalogItem.from_document(document)

    async def create_item(
        self,
        record_id: str,
        fields: Mapping[str, Any],
        category: Optional[ServiceCategory] = None
    ) -> CatalogItem:
        """
        Create an item and return it as stored.

        Raises:
            ValidationException: If title or description is missing
            StoreError: If the write fails
        """
        document = self.build_fields(fields, category)
        document["createdAt"] = utc_now_iso()

        item_id = await self.store.create_document(self._items_path(record_id), document)
        logger.info(
            f"Created item {item_id}",
            extra={"record_id": record_id, "title": document["title"]}
        )
        return CatalogItem(item_id=item_id, **document)

    async def create(
        self,
        record_id: str,
        fields: Mapping[str, Any],
        category: Optional[ServiceCategory] = None
    ) -> str:
        """Create an item; returns its store-assigned identifier."""
        item = await self.create_item(record_id, fields, category)
        return item.item_id

    async def update_item(
        self,
        record_id: str,
        item_id: str,
        fields: Mapping[str, Any],
        category: Optional[ServiceCategory] = None
    ) -> Dict[str, Any]:
        """
        Merge fields into an existing item.

        Only the supplied fields are written; title and description may be
        left out, but must not be blank when supplied.

        Returns:
            The stored-form fields that were written, including ``updatedAt``

        Raises:
            ValidationException: If a supplied title or description is blank
            DocumentNotFoundError: If the item does not exist
            StoreError: If the write fails
        """
        update_data = self.build_fields(fields, category, partial=True)
        update_data["updatedAt"] = utc_now_iso()

        await self.store.update_document(self._item_path(record_id, item_id), update_data)
        logger.info(
            f"Updated item {item_id}",
            extra={"record_id": record_id, "fields_updated": list(update_data.keys())}
        )
        return update_data

    async def update(
        self,
        record_id: str,
        item_id: str,
        fields: Mapping[str, Any],
        category: Optional[ServiceCategory] = None
    ) -> bool:
        await self.update_item(record_id, item_id, fields, category)
        return True

    async def delete(self, record_id: str, item_id: str) -> bool:
        """
        Remove an item unconditionally.

        Raises:
            StoreError: If the delete fails
        """
        removed = await self.store.delete_document(self._item_path(record_id, item_id))
        if removed:
            logger.info(f"Deleted item {item_id}", extra={"record_id": record_id})
        else:
            logger.info(f"Item already absent: {item_id}", extra={"record_id": record_id})
        return True
