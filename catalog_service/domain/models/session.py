from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from catalog_service.domain.interfaces.store_interface import StoredDocument


class Session(BaseModel):
    """
    Authenticated user context handed explicitly to controllers and services.

    Populated at sign-in and invalidated at sign-out; nothing holds it
    globally.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str
    user_id: str
    email: str
    full_name: Optional[str] = None
    is_admin: bool = False
    created_at: Optional[str] = None

    @classmethod
    def from_document(cls, document: StoredDocument) -> "Session":
        return cls(session_id=document.id, **{k: v for k, v in document.data.items() if k != "sessionId"})

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude={"session_id"})
