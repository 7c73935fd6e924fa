"""
Identity endpoints: sign-up, sign-in (password or federated), sign-out,
token refresh and password reset.
"""

from fastapi import APIRouter, Depends, status
from rural_properties.config import settings
from rural_properties.models.user import User
from rural_properties.schemas.auth import (
    SignUpRequest,
    SignInRequest,
    FederatedSignInRequest,
    TokenResponse,
    AuthResponse,
    RefreshTokenRequest,
    AccessTokenResponse,
    PasswordResetRequest,
    PasswordResetConfirm,
    MessageResponse
)
from rural_properties.schemas.error import get_error_responses
from rural_properties.schemas.user import UserResponse
from rural_properties.services.access import SessionContext, dashboard_route_for, role_for_record
from rural_properties.services.auth import AuthService
from rural_properties.utils.dependencies import (
    get_auth_service,
    get_session_context,
    require_authenticated
)


router = APIRouter(prefix="/auth", tags=["Authentication"])

RESET_ACKNOWLEDGEMENT = "If an account exists for that email, a reset link has been sent"


def build_auth_response(user: User, access_token: str, refresh_token: str) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user.to_dict()),
        tokens=TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.access_token_expire_minutes * 60
        ),
        dashboard=dashboard_route_for(role_for_record(user.role))
    )


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses=get_error_responses(409, 422)
)
async def sign_up(
    data: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    """
    Register a buyer or agent account and sign it in.
    """
    user, access_token, refresh_token = await auth_service.sign_up(data)
    return build_auth_response(user, access_token, refresh_token)


@router.post(
    "/signin",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in with email and password",
    responses=get_error_responses(401, 422)
)
async def sign_in(
    credentials: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    user, access_token, refresh_token = await auth_service.sign_in(credentials.email, credentials.password)
    return build_auth_response(user, access_token, refresh_token)


@router.post(
    "/federated",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in with a federated identity",
    responses=get_error_responses(401, 422)
)
async def sign_in_federated(
    data: FederatedSignInRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    user, access_token, refresh_token = await auth_service.sign_in_federated(data.provider, data.id_token)
    return build_auth_response(user, access_token, refresh_token)


@router.post(
    "/signout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign out"
)
async def sign_out(
    session: SessionContext = Depends(get_session_context),
    auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    """
    Tokens are stateless, so signing out only tells the client to drop them.
    """
    return MessageResponse(message=auth_service.sign_out(session))


@router.post(
    "/refresh",
    response_model=AccessTokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Refresh access token",
    responses=get_error_responses(401)
)
async def refresh_token(
    refresh_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AccessTokenResponse:
    access_token = await auth_service.refresh_access_token(refresh_data.refresh_token)
    return AccessTokenResponse(
        access_token=access_token,
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.post(
    "/password-reset",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Request a password reset email"
)
async def request_password_reset(
    data: PasswordResetRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    """
    Always acknowledges, so the response does not reveal which emails exist.
    """
    await auth_service.request_password_reset(data.email)
    return MessageResponse(message=RESET_ACKNOWLEDGEMENT)


@router.post(
    "/password-reset/confirm",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Set a new password with a reset token",
    responses=get_error_responses(401, 422)
)
async def confirm_password_reset(
    data: PasswordResetConfirm,
    auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    await auth_service.confirm_password_reset(data.token, data.new_password)
    return MessageResponse(message="Password updated")


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
    responses=get_error_responses(401)
)
async def get_current_user_info(
    session: SessionContext = Depends(require_authenticated)
) -> UserResponse:
    return UserResponse.model_validate(session.user.to_dict())
