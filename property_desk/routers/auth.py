"""
Authentication API endpoints for login, password reset issuance and identity.
"""

from fastapi import APIRouter, Depends, status
from property_desk.config import settings
from property_desk.services.auth import AuthService
from property_desk.schemas.auth import (
    LoginRequest,
    LoginResponse,
    ForgotPasswordRequest,
    MessageResponse,
    CurrentIdentityResponse,
)
from property_desk.schemas.error import COMMON_ERROR_RESPONSES
from property_desk.schemas.user import UserResponse
from property_desk.utils.auth import TokenPayload
from property_desk.utils.dependencies import get_auth_service, get_current_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with email and password; returns a bearer token and the user record",
    responses=COMMON_ERROR_RESPONSES
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Authenticate user and return a JWT token.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong
    """
    user, token = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )

    return LoginResponse(
        token=token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60,
        user=UserResponse.model_validate(user.to_dict())
    )


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Request a password reset",
    description="Always answers with the same message, whether or not the email is registered"
)
async def forgot_password(
    request_data: ForgotPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    message = await auth_service.request_password_reset(request_data.email)
    return MessageResponse(message=message)


@router.get(
    "/me",
    response_model=CurrentIdentityResponse,
    summary="Current identity",
    description="Identity decoded from the bearer token",
    responses=COMMON_ERROR_RESPONSES
)
async def get_me(current_user: TokenPayload = Depends(get_current_user)) -> CurrentIdentityResponse:
    return CurrentIdentityResponse(**current_user.to_dict())
