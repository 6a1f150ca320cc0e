from fastapi import APIRouter, Depends, Path, status
from typing import Any, Dict

from catalog_service.api.dependencies import (
    get_admin_session,
    get_request_logger_dependency,
    get_user_admin_service
)
from catalog_service.domain.models.session import Session
from catalog_service.domain.schemas.user import (
    AdminStatusUpdate,
    StatisticsResponse,
    UserListResponse
)
from catalog_service.domain.services.user_admin_service import UserAdminService
from catalog_service.utils.logger import LoggerAdapter


router = APIRouter(dependencies=[Depends(get_admin_session)])


@router.get(
    "",
    response_model=UserListResponse,
    status_code=status.HTTP_200_OK,
    summary="List users"
)
async def list_users(
    service: UserAdminService = Depends(get_user_admin_service)
) -> UserListResponse:
    users = await service.list_users()
    return UserListResponse(items=users, total=len(users))


@router.get(
    "/statistics",
    response_model=StatisticsResponse,
    status_code=status.HTTP_200_OK,
    summary="User statistics"
)
async def get_statistics(
    service: UserAdminService = Depends(get_user_admin_service)
) -> StatisticsResponse:
    """Total users and users created in the last seven days."""
    stats = await service.get_statistics()
    return StatisticsResponse(**stats)


@router.put(
    "/{uid}/admin",
    status_code=status.HTTP_200_OK,
    summary="Grant or revoke admin rights"
)
async def set_admin_status(
    payload: AdminStatusUpdate,
    uid: str = Path(..., description="User identifier"),
    session: Session = Depends(get_admin_session),
    service: UserAdminService = Depends(get_user_admin_service),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> Dict[str, Any]:
    logger.info(
        f"Admin status change for {uid}",
        extra={"changed_by": session.user_id, "is_admin": payload.is_admin}
    )
    await service.set_admin_status(uid, payload.is_admin)
    return {"uid": uid, "isAdmin": payload.is_admin}
