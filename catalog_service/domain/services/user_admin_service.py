from typing import Dict, List

from catalog_service.domain.interfaces.store_interface import DocumentStore
from catalog_service.domain.models.user import UserAccount
from catalog_service.utils.logger import get_logger
from catalog_service.utils.paths import join_path
from catalog_service.utils.timestamps import days_ago_iso, utc_now_iso

logger = get_logger(__name__)

RECENT_USER_DAYS = 7


class UserAdminService:
    """Admin-only user management: listing, admin flag, statistics."""

    def __init__(self, store: DocumentStore, users_collection: str = "users"):
        self.store = store
        self.users_collection = users_collection

    async def list_users(self) -> List[UserAccount]:
        documents = await self.store.list_documents(self.users_collection)
        return [UserAccount.from_document(document) for document in documents]

    async def set_admin_status(self, uid: str, is_admin: bool) -> bool:
        """
        Grant or revoke admin rights.

        Raises:
            DocumentNotFoundError: If the user does not exist
        """
        await self.store.update_document(
            join_path(self.users_collection, uid),
            {"isAdmin": bool(is_admin), "updatedAt": utc_now_iso()}
        )
        logger.info(f"Set admin status for user {uid}", extra={"is_admin": bool(is_admin)})
        return True

    async def get_statistics(self) -> Dict[str, int]:
        """
        Count all users and those created in the last seven days.

        Returns:
            ``{"totalUsers": ..., "recentUsers": ...}``
        """
        users = await self.store.list_documents(self.users_collection)
        recent = await self.store.query_documents(
            self.users_collection, "createdAt", ">=", days_ago_iso(RECENT_USER_DAYS)
        )
        return {"totalUsers": len(users), "recentUsers": len(recent)}
