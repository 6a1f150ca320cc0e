from typing import Any, List, Mapping, Optional

from catalog_service.domain.models.catalog_item import CatalogItem
from catalog_service.domain.models.category import ServiceCategory
from catalog_service.domain.models.session import Session
from catalog_service.domain.services.auth_service import require_admin
from catalog_service.domain.services.service_resolver import ServiceResolver
from catalog_service.infrastructure.repositories.item_repository import ItemRepository
from catalog_service.utils.exceptions import ValidationException
from catalog_service.utils.logger import get_request_logger


class CatalogAdminController:
    """
    Admin content screen for one service at a time.

    Resolves the service key, then keeps an in-memory list of its items in
    step with the store. Every mutation goes to the store first; the list is
    only patched after the store call succeeded, so a failure leaves it as
    it was.
    """

    def __init__(self, session: Session, resolver: ServiceResolver, items: ItemRepository):
        self.session = require_admin(session)
        self.resolver = resolver
        self.repository = items
        self.logger = get_request_logger(__name__, user_id=session.user_id)

        self.service_key: Optional[str] = None
        self.record_id: Optional[str] = None
        self.category: Optional[ServiceCategory] = None
        self.items: List[CatalogItem] = []

    def _require_open(self) -> str:
        if self.record_id is None:
            raise ValidationException(message="No service is open")
        return self.record_id

    async def open(self, service_key: str) -> List[CatalogItem]:
        """
        Resolve a service key and load its items.

        Raises:
            ValidationException: If the key is invalid
            StoreError: If resolution or loading fails
        """
        record_id = await self.resolver.resolve(service_key)
        items = await self.repository.list(record_id)

        self.service_key = service_key
        self.record_id = record_id
        self.category = ServiceCategory.from_key(service_key)
        self.items = items
        self.logger = self.logger.with_context(service_key=service_key, record_id=record_id)
        self.logger.info(f"Opened service {service_key}", extra={"item_count": len(items)})
        return list(self.items)

    async def refresh(self) -> List[CatalogItem]:
        record_id = self._require_open()
        self.items = await self.repository.list(record_id)
        return list(self.items)

    async def save_item(self, fields: Mapping[str, Any], item_id: Optional[str] = None) -> CatalogItem:
        """
        Create an item, or update ``item_id`` when given.

        Returns:
            The item as now held in the in-memory list

        Raises:
            ValidationException: If title or description is missing
            StoreError: If the write fails (``DocumentNotFoundError`` for a missing item)
        """
        record_id = self._require_open()

        if item_id is None:
            item = await self.repository.create_item(record_id, fields, self.category)
            self.items = [*self.items, item]
            return item

        written = await self.repository.update_item(record_id, item_id, fields, self.category)
        for index, existing in enumerate(self.items):
            if existing.item_id == item_id:
                item = existing.merged(written)
                self.items = [*self.items[:index], item, *self.items[index + 1:]]
                return item

        # Updated in the store but not loaded here yet
        item = await self.repository.get(record_id, item_id)
        self.items = [*self.items, item]
        return item

    async def delete_item(self, item_id: str, confirmed: bool = False) -> None:
        """
        Delete an item after explicit confirmation.

        Raises:
            ValidationException: If ``confirmed`` is not True
            StoreError: If the delete fails
        """
        record_id = self._require_open()
        if confirmed is not True:
            raise ValidationException(
                message="Deleting an item requires confirmation",
                details={"item_id": item_id}
            )

        await self.repository.delete(record_id, item_id)
        self.items = [item for item in self.items if item.item_id != item_id]
