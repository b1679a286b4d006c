from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from api.db.models import User
from api.deps.auth import get_admin_user_dep, get_current_user_dep
from api.deps.seasons import get_season_service_dep
from api.modules.seasons.schemas import (
    SeasonCreateRequest,
    SeasonDatesUpdateRequest,
    SeasonResponse,
)
from api.modules.seasons.service import SeasonService

router = APIRouter(prefix="/seasons", tags=["seasons"])
SEASON_SERVICE_DEP = Depends(get_season_service_dep)
CURRENT_USER_DEP = Depends(get_current_user_dep)
ADMIN_USER_DEP = Depends(get_admin_user_dep)


@router.post(
    "",
    response_model=SeasonResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Season (Admin)",
    description="Creates an inactive season. Years are unique.",
    responses={
        201: {"description": "Season created."},
        403: {"description": "Admin privileges required."},
        422: {"description": "Invalid date range or duplicate year."},
    },
)
async def post_season(
    request: SeasonCreateRequest,
    season_service: SeasonService = SEASON_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> SeasonResponse:
    del admin_user
    season = await season_service.create_season(request)
    return SeasonResponse.model_validate(season)


@router.get(
    "",
    response_model=list[SeasonResponse],
    summary="List Seasons",
    description="Returns every season, newest year first.",
)
async def list_seasons(
    season_service: SeasonService = SEASON_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> list[SeasonResponse]:
    del current_user
    seasons = await season_service.list_seasons()
    return [SeasonResponse.model_validate(season) for season in seasons]


@router.get(
    "/active",
    response_model=SeasonResponse,
    summary="Get Active Season",
    responses={404: {"description": "No season is active."}},
)
async def get_active_season(
    season_service: SeasonService = SEASON_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> SeasonResponse:
    del current_user
    season = await season_service.get_active_season()
    return SeasonResponse.model_validate(season)


@router.get(
    "/{season_id}",
    response_model=SeasonResponse,
    summary="Get Season",
    responses={404: {"description": "Season not found."}},
)
async def get_season(
    season_id: UUID,
    season_service: SeasonService = SEASON_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> SeasonResponse:
    del current_user
    season = await season_service.get_season(season_id)
    return SeasonResponse.model_validate(season)


@router.post(
    "/{season_id}/activate",
    response_model=SeasonResponse,
    summary="Activate Season (Admin)",
    description="Marks the season active and deactivates every other season.",
    responses={404: {"description": "Season not found."}},
)
async def post_activate_season(
    season_id: UUID,
    season_service: SeasonService = SEASON_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> SeasonResponse:
    del admin_user
    season = await season_service.activate_season(season_id)
    return SeasonResponse.model_validate(season)


@router.patch(
    "/{season_id}/dates",
    response_model=SeasonResponse,
    summary="Update Season Dates (Admin)",
    responses={
        404: {"description": "Season not found."},
        422: {"description": "start_date after end_date."},
    },
)
async def patch_season_dates(
    season_id: UUID,
    request: SeasonDatesUpdateRequest,
    season_service: SeasonService = SEASON_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> SeasonResponse:
    del admin_user
    season = await season_service.update_season_dates(
        season_id, request.start_date, request.end_date
    )
    return SeasonResponse.model_validate(season)


@router.delete(
    "/{season_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Season (Admin)",
    responses={
        404: {"description": "Season not found."},
        409: {"description": "Season is active or still has data."},
    },
)
async def delete_season(
    season_id: UUID,
    season_service: SeasonService = SEASON_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> Response:
    del admin_user
    await season_service.delete_season(season_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
