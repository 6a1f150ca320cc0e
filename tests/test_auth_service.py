import pytest

from catalog_service.domain.services.auth_service import AuthService, require_admin
from catalog_service.utils.exceptions import (
    ConflictException,
    ForbiddenException,
    UnauthorizedException,
    ValidationException
)
from catalog_service.utils.security import create_access_token


async def test_sign_up_stores_user_without_exposing_hash(auth_service, store):
    user = await auth_service.sign_up(" Traveller@Example.com ", "secret123", "Tra Veller")

    assert user.email == "traveller@example.com"
    assert user.is_admin is False
    assert not hasattr(user, "password_hash")

    stored = await store.get_document(f"users/{user.uid}")
    assert stored.data["uid"] == user.uid
    assert stored.data["fullName"] == "Tra Veller"
    assert stored.data["passwordHash"] != "secret123"


async def test_sign_up_rejects_duplicate_email(auth_service):
    await auth_service.sign_up("a@example.com", "secret123", "A")

    with pytest.raises(ConflictException):
        await auth_service.sign_up("A@example.com", "secret456", "Other A")


@pytest.mark.parametrize(
    "email,password,full_name",
    [
        ("not-an-email", "secret123", "A"),
        ("a@example.com", "short", "A"),
        ("a@example.com", "secret123", "  "),
    ]
)
async def test_sign_up_validates_input(auth_service, email, password, full_name):
    with pytest.raises(ValidationException):
        await auth_service.sign_up(email, password, full_name)


async def test_sign_in_opens_session(auth_service, store):
    user = await auth_service.sign_up("a@example.com", "secret123", "A", is_admin=True)

    session, token = await auth_service.sign_in("a@example.com", "secret123")

    assert session.user_id == user.uid
    assert session.is_admin is True
    assert await store.get_document(f"sessions/{session.session_id}") is not None
    assert (await auth_service.authenticate(token)).session_id == session.session_id


async def test_sign_in_rejects_bad_credentials(auth_service):
    await auth_service.sign_up("a@example.com", "secret123", "A")

    with pytest.raises(UnauthorizedException):
        await auth_service.sign_in("a@example.com", "wrong-password")
    with pytest.raises(UnauthorizedException):
        await auth_service.sign_in("nobody@example.com", "secret123")


async def test_sign_out_revokes_token(auth_service):
    await auth_service.sign_up("a@example.com", "secret123", "A")
    session, token = await auth_service.sign_in("a@example.com", "secret123")

    await auth_service.sign_out(session)

    with pytest.raises(UnauthorizedException):
        await auth_service.authenticate(token)


async def test_authenticate_rejects_foreign_and_expired_tokens(auth_service, store):
    await auth_service.sign_up("a@example.com", "secret123", "A")
    session, _ = await auth_service.sign_in("a@example.com", "secret123")

    claims = {"sub": session.user_id, "sid": session.session_id}

    forged = create_access_token(claims, "another-signing-key-that-is-long-enough")
    with pytest.raises(UnauthorizedException):
        await auth_service.authenticate(forged)

    expired = create_access_token(
        claims,
        "test-secret-key-for-catalog-service-tests",
        expires_minutes=-1
    )
    with pytest.raises(UnauthorizedException) as exc_info:
        await auth_service.authenticate(expired)
    assert exc_info.value.message == "Session token has expired"

    mismatched = create_access_token(
        {**claims, "sub": "someone-else"},
        "test-secret-key-for-catalog-service-tests"
    )
    with pytest.raises(UnauthorizedException):
        await auth_service.authenticate(mismatched)


async def test_check_is_admin_reads_current_flag(auth_service, store, admin_session):
    assert await auth_service.check_is_admin(admin_session) is True

    await store.update_document(f"users/{admin_session.user_id}", {"isAdmin": False})

    assert await auth_service.check_is_admin(admin_session) is False
    refreshed = await auth_service.refresh_admin_flag(admin_session)
    assert refreshed.is_admin is False
    assert admin_session.is_admin is True


async def test_require_admin(admin_session, user_session):
    assert require_admin(admin_session) is admin_session

    with pytest.raises(UnauthorizedException):
        require_admin(None)
    with pytest.raises(ForbiddenException):
        require_admin(user_session)


def test_from_settings_uses_configured_collections(store):
    from catalog_service.config import get_settings

    service = AuthService.from_settings(store, get_settings())

    assert service.users_collection == "users"
    assert service.sessions_collection == "sessions"
