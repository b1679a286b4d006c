from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from api.db.models import User
from api.deps.auth import get_admin_user_dep, get_current_user_dep
from api.deps.schedule import get_schedule_service_dep
from api.modules.schedule.schemas import (
    GenerationResponse,
    TemplateResponse,
    TemplateSaveRequest,
)
from api.modules.schedule.service import GenerationResult, ScheduleService

router = APIRouter(prefix="/schedule", tags=["schedule"])
SCHEDULE_SERVICE_DEP = Depends(get_schedule_service_dep)
CURRENT_USER_DEP = Depends(get_current_user_dep)
ADMIN_USER_DEP = Depends(get_admin_user_dep)


def _generation_response(result: GenerationResult) -> GenerationResponse:
    return GenerationResponse(
        created_count=result.created_count,
        updated_count=result.updated_count,
        dates=result.dates,
    )


@router.put(
    "/templates",
    response_model=TemplateResponse,
    summary="Save Weekly Template (Admin)",
    description=(
        "Creates or replaces the template for a season and weekday. "
        "Omitted booking window fields fall back to league defaults."
    ),
    responses={
        200: {"description": "Template saved."},
        404: {"description": "Season not found."},
        422: {"description": "Invalid slots, timezone or empty booking window."},
    },
)
async def put_template(
    request: TemplateSaveRequest,
    schedule_service: ScheduleService = SCHEDULE_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> TemplateResponse:
    del admin_user
    template = await schedule_service.save_template(request)
    return TemplateResponse.model_validate(template)


@router.get(
    "/templates",
    response_model=list[TemplateResponse],
    summary="List Templates",
    description="Returns a season's weekly templates ordered by weekday.",
)
async def list_templates(
    season_id: UUID,
    schedule_service: ScheduleService = SCHEDULE_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> list[TemplateResponse]:
    del current_user
    templates = await schedule_service.list_templates(season_id)
    return [TemplateResponse.model_validate(template) for template in templates]


@router.get(
    "/templates/{template_id}",
    response_model=TemplateResponse,
    summary="Get Template",
    responses={404: {"description": "Template not found."}},
)
async def get_template(
    template_id: UUID,
    schedule_service: ScheduleService = SCHEDULE_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> TemplateResponse:
    del current_user
    template = await schedule_service.get_template(template_id)
    return TemplateResponse.model_validate(template)


@router.delete(
    "/templates/{template_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Template (Admin)",
    description="Deletes the template. Tee times it generated are kept.",
    responses={404: {"description": "Template not found."}},
)
async def delete_template(
    template_id: UUID,
    schedule_service: ScheduleService = SCHEDULE_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> Response:
    del admin_user
    await schedule_service.delete_template(template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/templates/{template_id}/generate",
    response_model=GenerationResponse,
    summary="Generate Tee Times (Admin)",
    description=(
        "Expands the template over its season. Existing tee times keep their "
        "availability flag and reservations; only window and capacity are refreshed."
    ),
    responses={
        200: {"description": "Tee times generated."},
        404: {"description": "Template or season not found."},
        409: {"description": "Booking window closes before it opens on some dates."},
    },
)
async def post_generate_template(
    template_id: UUID,
    schedule_service: ScheduleService = SCHEDULE_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> GenerationResponse:
    del admin_user
    result = await schedule_service.generate_slots(template_id)
    return _generation_response(result)


@router.post(
    "/seasons/{season_id}/generate",
    response_model=GenerationResponse,
    summary="Generate Season Tee Times (Admin)",
    description="Runs generation for every template of the season in one transaction.",
    responses={
        404: {"description": "Season not found."},
        409: {"description": "A template has an inverted booking window."},
    },
)
async def post_generate_season(
    season_id: UUID,
    schedule_service: ScheduleService = SCHEDULE_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> GenerationResponse:
    del admin_user
    result = await schedule_service.generate_for_season(season_id)
    return _generation_response(result)
