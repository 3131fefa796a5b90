from fastapi import APIRouter, Request

from housing.api.deps import CurrentUser
from housing.core.config import settings
from housing.core.limiter import limiter
from housing.db import SessionDep
from housing.schemas import (
    ApiResponse,
    ChangePasswordRequest,
    LoginRequest,
    LoginResult,
    RefreshTokenRequest,
    TokenPair,
    UserRead,
)
from housing.services import auth as auth_service

router = APIRouter()


@router.post(
    "/login",
    response_model=ApiResponse[LoginResult],
    summary="Login and obtain tokens",
)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, payload: LoginRequest, session: SessionDep) -> ApiResponse[LoginResult]:
    user, tokens = auth_service.login(session, payload.identifier, payload.password)
    return ApiResponse.create(
        LoginResult(user=UserRead.model_validate(user), tokens=tokens),
        message="Login successful",
    )


@router.post(
    "/refresh",
    response_model=ApiResponse[TokenPair],
    summary="Rotate refresh token",
)
def refresh_tokens(payload: RefreshTokenRequest, session: SessionDep) -> ApiResponse[TokenPair]:
    return ApiResponse.create(auth_service.refresh(session, payload.refresh_token))


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    summary="Revoke refresh token",
)
def logout(payload: RefreshTokenRequest, session: SessionDep) -> ApiResponse[None]:
    auth_service.logout(session, payload.refresh_token)
    return ApiResponse.create(message="Logged out successfully")


@router.get(
    "/me",
    response_model=ApiResponse[UserRead],
    summary="Current user profile",
)
def read_me(current_user: CurrentUser) -> ApiResponse[UserRead]:
    return ApiResponse.create(UserRead.model_validate(current_user))


@router.post(
    "/change-password",
    response_model=ApiResponse[None],
    summary="Change own password",
)
def change_password(
    payload: ChangePasswordRequest,
    session: SessionDep,
    current_user: CurrentUser,
) -> ApiResponse[None]:
    auth_service.change_password(
        session, current_user, payload.current_password, payload.new_password
    )
    return ApiResponse.create(message="Password changed successfully")
