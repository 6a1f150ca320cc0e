from fastapi import APIRouter, Depends, Response, status

from catalog_service.api.dependencies import (
    get_auth_service,
    get_current_session,
    get_request_logger_dependency
)
from catalog_service.domain.models.session import Session
from catalog_service.domain.models.user import UserAccount
from catalog_service.domain.schemas.auth import (
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    TokenResponse
)
from catalog_service.domain.services.auth_service import AuthService
from catalog_service.utils.logger import LoggerAdapter


router = APIRouter()


def _session_response(session: Session) -> SessionResponse:
    return SessionResponse(**session.model_dump(exclude={"created_at"}))


@router.post(
    "/signup",
    response_model=UserAccount,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    response_description="The created account"
)
async def sign_up(
    payload: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
    logger: LoggerAdapter = Depends(get_request_logger_dependency)
) -> UserAccount:
    """
    Register a regular (non-admin) user.

    Admin rights are granted afterwards by an admin.
    """
    logger.info("Registering new user")
    return await auth_service.sign_up(payload.email, payload.password, payload.full_name)


@router.post(
    "/signin",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in",
    response_description="Access token and session"
)
async def sign_in(
    payload: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    session, token = await auth_service.sign_in(payload.email, payload.password)
    return TokenResponse(access_token=token, session=_session_response(session))


@router.post(
    "/signout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign out",
    response_class=Response
)
async def sign_out(
    session: Session = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service)
) -> Response:
    """End the current session; its token is rejected afterwards."""
    await auth_service.sign_out(session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/me",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Current session"
)
async def get_me(
    session: Session = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service)
) -> SessionResponse:
    """
    Return the current session with the admin flag as currently stored.
    """
    session = await auth_service.refresh_admin_flag(session)
    return _session_response(session)
