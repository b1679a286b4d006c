from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlmodel import col

from api.config import Settings, get_settings
from api.db.models import Season
from api.db.session import get_engine

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    app: str
    env: str


class HealthReadyResponse(BaseModel):
    status: str
    app: str
    env: str
    checks: dict[str, bool]


def _resolve_settings(request: Request) -> Settings:
    state_settings = getattr(request.app.state, "settings", None)
    if isinstance(state_settings, Settings):
        return state_settings
    return get_settings()


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health Check",
    description="Liveness probe; does not touch the database.",
    responses={
        200: {
            "description": "Service is alive.",
            "content": {
                "application/json": {
                    "example": {
                        "status": "ok",
                        "app": "League Tee Sheet API",
                        "env": "development",
                    }
                }
            },
        }
    },
)
def get_health(request: Request) -> HealthResponse:
    settings = _resolve_settings(request)
    return HealthResponse(
        status="ok",
        app=settings.app_name,
        env=settings.app_env,
    )


async def _count_active_seasons() -> int:
    engine = get_engine()
    async with engine.connect() as connection:
        result = await connection.execute(
            select(func.count()).select_from(Season).where(col(Season.is_active))
        )
        return int(result.scalar_one())


@router.get(
    "/ready",
    response_model=HealthReadyResponse,
    summary="Readiness Check",
    description=(
        "Checks database connectivity. ``active_season`` reports whether members "
        "currently have a season to book and score against."
    ),
    responses={
        200: {
            "description": "Service is ready.",
            "content": {
                "application/json": {
                    "example": {
                        "status": "ready",
                        "app": "League Tee Sheet API",
                        "env": "development",
                        "checks": {"db": True, "active_season": True},
                    }
                }
            },
        },
        503: {"description": "Database unavailable."},
    },
)
async def get_ready(request: Request) -> HealthReadyResponse:
    settings = _resolve_settings(request)
    # Connection failures propagate to the 503 database handler.
    active_seasons = await _count_active_seasons()
    return HealthReadyResponse(
        status="ready",
        app=settings.app_name,
        env=settings.app_env,
        checks={"db": True, "active_season": active_seasons > 0},
    )
