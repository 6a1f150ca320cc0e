from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from catalog_service.domain.interfaces.store_interface import StoredDocument


class UserAccount(BaseModel):
    """Registered user as stored in the users collection (password hash excluded)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    uid: str
    email: str
    full_name: Optional[str] = None
    is_admin: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_document(cls, document: StoredDocument) -> "UserAccount":
        data = dict(document.data)
        data.pop("passwordHash", None)
        data.setdefault("uid", document.id)
        return cls(**data)
