"""
Service responsible for accounts and sessions.

Users sign up with an email, a password and a full name; signing in opens a
session document and returns a signed token that refers to it. Signing out
deletes the session document, so the token stops working immediately even
though it has not expired. Controllers receive the resulting ``Session``
explicitly.
"""

from typing import Optional, Tuple
import uuid

from catalog_service.config import Settings
from catalog_service.domain.interfaces.store_interface import DocumentStore
from catalog_service.domain.models.session import Session
from catalog_service.domain.models.user import UserAccount
from catalog_service.utils.exceptions import (
    ConflictException,
    ForbiddenException,
    UnauthorizedException,
    ValidationException
)
from catalog_service.utils.logger import get_logger
from catalog_service.utils.paths import join_path
from catalog_service.utils.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password
)
from catalog_service.utils.timestamps import utc_now_iso

MIN_PASSWORD_LENGTH = 6


def require_admin(session: Optional[Session]) -> Session:
    """
    Gate for admin-only operations.

    Raises:
        UnauthorizedException: If there is no session
        ForbiddenException: If the session does not belong to an admin
    """
    if session is None:
        raise UnauthorizedException()
    if not session.is_admin:
        raise ForbiddenException("You do not have permission to access this area.")
    return session


class AuthService:
    """Sign-up, sign-in, sign-out and session lookup over the document store."""

    def __init__(
        self,
        store: DocumentStore,
        secret_key: str,
        algorithm: str = "HS256",
        token_expire_minutes: int = 60,
        users_collection: str = "users",
        sessions_collection: str = "sessions"
    ):
        self.store = store
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.token_expire_minutes = token_expire_minutes
        self.users_collection = users_collection
        self.sessions_collection = sessions_collection
        self.logger = get_logger(__name__)

    @classmethod
    def from_settings(cls, store: DocumentStore, settings: Settings) -> "AuthService":
        return cls(
            store,
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            token_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            users_collection=settings.USERS_COLLECTION,
            sessions_collection=settings.SESSIONS_COLLECTION
        )

    @staticmethod
    def _normalize_email(email: str) -> str:
        value = (email or "").strip().lower()
        if "@" not in value or value.startswith("@") or value.endswith("@"):
            raise ValidationException(
                message="A valid email address is required",
                details={"field": "email"}
            )
        return value

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: str,
        is_admin: bool = False
    ) -> UserAccount:
        """
        Register a new user.

        Args:
            email: Login email, unique across users
            password: Plain password (at least six characters)
            full_name: Display name
            is_admin: Whether the user may use the admin panel

        Returns:
            The created account

        Raises:
            ValidationException: If a field is missing or the password is too short
            ConflictException: If the email is already registered
            StoreError: If the store call fails
        """
        email = self._normalize_email(email)
        full_name = (full_name or "").strip()
        if not full_name:
            raise ValidationException(message="Full name is required", details={"field": "fullName"})
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationException(
                message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                details={"field": "password"}
            )

        existing = await self.store.query_documents(self.users_collection, "email", "==", email)
        if existing:
            raise ConflictException("Email address is already in use", details={"field": "email"})

        uid = uuid.uuid4().hex
        document = {
            "uid": uid,
            "email": email,
            "fullName": full_name,
            "isAdmin": bool(is_admin),
            "createdAt": utc_now_iso(),
            "passwordHash": hash_password(password),
        }
        await self.store.set_document(join_path(self.users_collection, uid), document)

        self.logger.info(f"Registered user {uid}", extra={"is_admin": bool(is_admin)})
        return UserAccount(**{k: v for k, v in document.items() if k != "passwordHash"})

    async def sign_in(self, email: str, password: str) -> Tuple[Session, str]:
        """
        Open a session for valid credentials.

        Returns:
            (session, access token)

        Raises:
            UnauthorizedException: If the email is unknown or the password is wrong
        """
        email = self._normalize_email(email)
        matches = await self.store.query_documents(self.users_collection, "email", "==", email)
        user = matches[0] if matches else None
        if user is None or not verify_password(password or "", user.data.get("passwordHash", "")):
            self.logger.info("Rejected sign-in attempt")
            raise UnauthorizedException("Invalid email or password")

        session = Session(
            session_id=uuid.uuid4().hex,
            user_id=user.id,
            email=email,
            full_name=user.data.get("fullName"),
            is_admin=bool(user.data.get("isAdmin", False)),
            created_at=utc_now_iso()
        )
        await self.store.set_document(
            join_path(self.sessions_collection, session.session_id),
            session.to_document()
        )

        token = create_access_token(
            {"sub": session.user_id, "sid": session.session_id},
            self.secret_key,
            algorithm=self.algorithm,
            expires_minutes=self.token_expire_minutes
        )
        self.logger.info(f"User {session.user_id} signed in", extra={"is_admin": session.is_admin})
        return session, token

    async def sign_out(self, session: Session) -> None:
        """Invalidate a session; its token is rejected from now on."""
        await self.store.delete_document(join_path(self.sessions_collection, session.session_id))
        self.logger.info(f"User {session.user_id} signed out")

    async def authenticate(self, token: str) -> Session:
        """
        Resolve an access token to its open session.

        Raises:
            UnauthorizedException: If the token is invalid or the session has ended
        """
        claims = decode_access_token(token, self.secret_key, self.algorithm)
        session_id = claims.get("sid")
        if not session_id:
            raise UnauthorizedException("Invalid session token")

        document = await self.store.get_document(join_path(self.sessions_collection, session_id))
        if document is None:
            raise UnauthorizedException("Session has ended, please sign in again")

        session = Session.from_document(document)
        if session.user_id != claims.get("sub"):
            raise UnauthorizedException("Invalid session token")
        return session

    async def check_is_admin(self, session: Session) -> bool:
        """Re-read the admin flag from the user's document."""
        document = await self.store.get_document(join_path(self.users_collection, session.user_id))
        if document is None:
            return False
        return bool(document.data.get("isAdmin", False))

    async def refresh_admin_flag(self, session: Session) -> Session:
        """Copy of the session carrying the current admin flag."""
        is_admin = await self.check_is_admin(session)
        if is_admin != session.is_admin:
            self.logger.info(
                f"Admin flag changed for user {session.user_id}",
                extra={"is_admin": is_admin}
            )
        return session.model_copy(update={"is_admin": is_admin})
