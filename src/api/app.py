from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import Settings, get_settings
from api.error_handling import register_error_handlers
from api.modules.auth.router import router as auth_router
from api.modules.health.router import router as health_router
from api.modules.identity.router import router as identity_router
from api.modules.reservations.router import router as reservations_router
from api.modules.schedule.router import router as schedule_router
from api.modules.scores.router import router as scores_router
from api.modules.seasons.router import router as seasons_router
from api.modules.tee_times.router import router as tee_times_router
from api.observability import configure_logging, register_request_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    cfg = settings or get_settings()
    configure_logging(cfg)
    app = FastAPI(
        title=cfg.app_name,
        debug=cfg.app_debug,
        docs_url=cfg.docs_url,
        redoc_url=cfg.redoc_url,
    )
    register_error_handlers(app)
    if cfg.app_log_requests:
        register_request_logging(app)
    if cfg.app_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cfg.app_cors_origins,
            allow_credentials=cfg.app_cors_allow_credentials,
            allow_methods=cfg.app_cors_allow_methods,
            allow_headers=cfg.app_cors_allow_headers,
        )
    app.state.settings = cfg
    app.include_router(health_router)
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(identity_router, prefix="/api/v1")
    app.include_router(seasons_router, prefix="/api/v1")
    app.include_router(schedule_router, prefix="/api/v1")
    app.include_router(tee_times_router, prefix="/api/v1")
    app.include_router(reservations_router, prefix="/api/v1")
    app.include_router(scores_router, prefix="/api/v1")
    return app


app = create_app()
