from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from api.db.models import User
from api.deps.auth import get_admin_user_dep, get_current_user_dep
from api.deps.scores import get_score_service_dep
from api.modules.scores.schemas import (
    CourseResponse,
    NetScoreRequest,
    NetScoreResponse,
    RingerResponse,
    RoundResponse,
    RoundSubmitRequest,
    ScoreResponse,
    ScoreUpdateRequest,
    StandingResponse,
)
from api.modules.scores.service import ScoreService

router = APIRouter(prefix="/scores", tags=["scores"])
SCORE_SERVICE_DEP = Depends(get_score_service_dep)
CURRENT_USER_DEP = Depends(get_current_user_dep)
ADMIN_USER_DEP = Depends(get_admin_user_dep)


@router.get(
    "/course",
    response_model=CourseResponse,
    summary="Course Layout",
    description="Par and handicap difficulty rank per hole (rank 1 is hardest).",
)
def get_course(score_service: ScoreService = SCORE_SERVICE_DEP) -> CourseResponse:
    return score_service.course()


@router.post(
    "/net",
    response_model=NetScoreResponse,
    summary="Preview Net Score",
    description="Applies strokes given to 18 gross hole scores. 0 or null marks an unplayed hole.",
    responses={422: {"description": "Hole score out of range."}},
)
def post_net_score(
    request: NetScoreRequest,
    score_service: ScoreService = SCORE_SERVICE_DEP,
) -> NetScoreResponse:
    return score_service.compute_net(request.holes, request.strokes_given)


@router.post(
    "/rounds",
    response_model=RoundResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Round",
    description=(
        "Records a round for one or more members. Net scores use each member's "
        "current strokes given, which is stored with the score."
    ),
    responses={
        404: {"description": "Season or player not found."},
        422: {"description": "Invalid hole scores or duplicate players."},
    },
)
async def post_round(
    request: RoundSubmitRequest,
    score_service: ScoreService = SCORE_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> RoundResponse:
    return await score_service.submit_round(
        play_date=request.date,
        season_id=request.season_id,
        submitted_by=current_user.id,
        players=request.players,
    )


@router.get(
    "/rounds",
    response_model=list[RoundResponse],
    summary="League Rounds",
    description="Rounds of the season (active season by default), newest first.",
)
async def list_rounds(
    season_id: UUID | None = None,
    score_service: ScoreService = SCORE_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> list[RoundResponse]:
    del current_user
    return await score_service.list_league_rounds(season_id)


@router.get(
    "/rounds/me",
    response_model=list[RoundResponse],
    summary="My Rounds",
)
async def list_my_rounds(
    season_id: UUID | None = None,
    score_service: ScoreService = SCORE_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> list[RoundResponse]:
    return await score_service.list_my_rounds(current_user.id, season_id)


@router.get(
    "/rounds/{round_id}",
    response_model=RoundResponse,
    summary="Get Round",
    responses={404: {"description": "Round not found."}},
)
async def get_round(
    round_id: UUID,
    score_service: ScoreService = SCORE_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> RoundResponse:
    del current_user
    return await score_service.get_round(round_id)


@router.put(
    "/{score_id}",
    response_model=ScoreResponse,
    summary="Edit Score (Admin)",
    description="Replaces hole scores; net is recomputed with the stored strokes given.",
    responses={404: {"description": "Score not found."}},
)
async def put_score(
    score_id: UUID,
    request: ScoreUpdateRequest,
    score_service: ScoreService = SCORE_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> ScoreResponse:
    del admin_user
    return await score_service.edit_score(score_id, request.holes)


@router.delete(
    "/rounds/{round_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Round (Admin)",
    responses={404: {"description": "Round not found."}},
)
async def delete_round(
    round_id: UUID,
    score_service: ScoreService = SCORE_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> Response:
    del admin_user
    await score_service.delete_round(round_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/leaderboard",
    response_model=list[StandingResponse],
    summary="Season Leaderboard",
    description="Members ranked by net scoring average; ties go to more rounds played.",
)
async def get_leaderboard(
    season_id: UUID | None = None,
    score_service: ScoreService = SCORE_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> list[StandingResponse]:
    del current_user
    return await score_service.leaderboard(season_id)


@router.get(
    "/ringer/{user_id}",
    response_model=RingerResponse,
    summary="Ringer Scorecard",
    description="Best gross and net score per hole across the member's season rounds.",
    responses={404: {"description": "Member or season not found."}},
)
async def get_ringer(
    user_id: UUID,
    season_id: UUID | None = None,
    score_service: ScoreService = SCORE_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> RingerResponse:
    del current_user
    return await score_service.ringer(user_id, season_id)
