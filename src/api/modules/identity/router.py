from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from api.common.pagination import clamp_page
from api.db.models import User
from api.deps.auth import get_admin_user_dep, get_current_user_dep
from api.deps.identity import get_identity_service_dep
from api.modules.identity.schemas import (
    HandicapUpdateRequest,
    UserListResponse,
    UserResponse,
)
from api.modules.identity.service import IdentityService

router = APIRouter(prefix="/users", tags=["users"])
IDENTITY_SERVICE_DEP = Depends(get_identity_service_dep)
CURRENT_USER_DEP = Depends(get_current_user_dep)
ADMIN_USER_DEP = Depends(get_admin_user_dep)


@router.get(
    "",
    response_model=UserListResponse,
    summary="List Members",
    description="Returns active league members ordered by name.",
    responses={
        200: {"description": "Member list returned."},
        401: {"description": "Missing or invalid access token."},
    },
)
async def list_users(
    limit: int = 50,
    offset: int = 0,
    identity_service: IdentityService = IDENTITY_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> UserListResponse:
    del current_user
    safe_limit, safe_offset = clamp_page(limit, offset)
    total, users = await identity_service.list_users(limit=safe_limit, offset=safe_offset)
    items = [UserResponse.model_validate(user) for user in users]
    return UserListResponse(
        items=items,
        total=total,
        limit=safe_limit,
        offset=safe_offset,
        has_more=(safe_offset + len(items)) < total,
    )


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get Member",
    description="Returns a league member by ID.",
    responses={
        200: {"description": "Member found."},
        401: {"description": "Missing or invalid access token."},
        404: {"description": "Member not found."},
    },
)
async def get_user(
    user_id: UUID,
    identity_service: IdentityService = IDENTITY_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> UserResponse:
    del current_user
    user = await identity_service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.patch(
    "/{user_id}/handicap",
    response_model=UserResponse,
    summary="Set Member Handicap (Admin)",
    description="Sets strokes given for future rounds. Past scores keep their snapshot.",
    responses={
        200: {"description": "Handicap updated."},
        403: {"description": "Admin privileges required."},
        404: {"description": "Member not found."},
        422: {"description": "Strokes given out of range."},
    },
)
async def patch_handicap(
    user_id: UUID,
    request: HandicapUpdateRequest,
    identity_service: IdentityService = IDENTITY_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> UserResponse:
    del admin_user
    user = await identity_service.set_handicap(user_id, request.strokes_given)
    return UserResponse.model_validate(user)
