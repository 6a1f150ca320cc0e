import pytest

from catalog_service.domain.services.user_admin_service import UserAdminService
from catalog_service.utils.exceptions import DocumentNotFoundError


@pytest.fixture
def user_admin(store):
    return UserAdminService(store)


async def test_list_users_hides_password_hash(user_admin, auth_service):
    await auth_service.sign_up("a@example.com", "secret123", "A")
    await auth_service.sign_up("b@example.com", "secret123", "B", is_admin=True)

    users = await user_admin.list_users()

    assert sorted(user.email for user in users) == ["a@example.com", "b@example.com"]
    assert all("passwordHash" not in user.model_dump(by_alias=True) for user in users)


async def test_set_admin_status(user_admin, auth_service, store):
    user = await auth_service.sign_up("a@example.com", "secret123", "A")

    assert await user_admin.set_admin_status(user.uid, True) is True

    stored = await store.get_document(f"users/{user.uid}")
    assert stored.data["isAdmin"] is True
    assert "updatedAt" in stored.data


async def test_set_admin_status_of_missing_user(user_admin):
    with pytest.raises(DocumentNotFoundError):
        await user_admin.set_admin_status("missing", True)


async def test_statistics_count_recent_users(user_admin, auth_service, store):
    await auth_service.sign_up("new@example.com", "secret123", "New")
    await store.set_document(
        "users/old",
        {"uid": "old", "email": "old@example.com", "createdAt": "2020-01-01T00:00:00.000Z"}
    )

    assert await user_admin.get_statistics() == {"totalUsers": 2, "recentUsers": 1}


async def test_statistics_of_empty_store(user_admin):
    assert await user_admin.get_statistics() == {"totalUsers": 0, "recentUsers": 0}
