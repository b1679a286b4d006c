from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from api.db.models import User
from api.deps.auth import get_auth_service_dep, get_current_user_dep
from api.modules.auth.schemas import (
    AuthLoginRequest,
    AuthRegisterRequest,
    AuthTokenResponse,
    AuthUserResponse,
)
from api.modules.auth.service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])
AUTH_SERVICE_DEP = Depends(get_auth_service_dep)
CURRENT_USER_DEP = Depends(get_current_user_dep)


@router.post(
    "/register",
    response_model=AuthUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Member",
    description="Creates a league member account with username, optional email and password.",
    responses={
        201: {"description": "Member registered successfully."},
        409: {"description": "Username or email already exists."},
    },
)
async def post_register(
    request: AuthRegisterRequest,
    auth_service: AuthService = AUTH_SERVICE_DEP,
) -> AuthUserResponse:
    try:
        user = await auth_service.register(request)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    return AuthUserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=AuthTokenResponse,
    summary="Login",
    description="Authenticates member credentials and returns a bearer access token.",
    responses={
        200: {"description": "Authentication successful."},
        401: {"description": "Invalid credentials or inactive user."},
    },
)
async def post_login(
    request: AuthLoginRequest,
    auth_service: AuthService = AUTH_SERVICE_DEP,
) -> AuthTokenResponse:
    try:
        return await auth_service.login(request)
    except PermissionError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


@router.get(
    "/me",
    response_model=AuthUserResponse,
    summary="Get Current Member",
    description="Returns profile data for the authenticated member.",
    responses={
        200: {"description": "Current member profile."},
        401: {"description": "Missing or invalid access token."},
    },
)
async def get_me(current_user: User = CURRENT_USER_DEP) -> AuthUserResponse:
    return AuthUserResponse.model_validate(current_user)
