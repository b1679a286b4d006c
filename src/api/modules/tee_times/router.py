from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from api.db.models import User
from api.deps.auth import get_admin_user_dep, get_current_user_dep
from api.deps.tee_times import get_tee_time_service_dep
from api.modules.tee_times.schemas import (
    AvailabilityUpdateRequest,
    BulkAvailabilityRequest,
    BulkAvailabilityResponse,
    ManualTeeTimesRequest,
    ManualTeeTimesResponse,
    TeeTimeAvailabilityResponse,
)
from api.modules.tee_times.service import TeeTimeService

router = APIRouter(prefix="/tee-times", tags=["tee-times"])
TEE_TIME_SERVICE_DEP = Depends(get_tee_time_service_dep)
CURRENT_USER_DEP = Depends(get_current_user_dep)
ADMIN_USER_DEP = Depends(get_admin_user_dep)


@router.get(
    "",
    response_model=list[TeeTimeAvailabilityResponse],
    summary="Tee Time Availability",
    description=(
        "Returns the tee times on a date with seats left, booking window status "
        "and whether each can be booked right now."
    ),
    responses={422: {"description": "Malformed date or time."}},
)
async def get_availability(
    date: date,
    time: str | None = None,
    tee_time_service: TeeTimeService = TEE_TIME_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> list[TeeTimeAvailabilityResponse]:
    del current_user
    return await tee_time_service.get_availability(date, time)


@router.get(
    "/dates",
    response_model=list[date],
    summary="Upcoming Tee Time Dates",
    description="Distinct dates from today onward that have tee times.",
)
async def get_upcoming_dates(
    season_id: UUID | None = None,
    from_date: date | None = None,
    tee_time_service: TeeTimeService = TEE_TIME_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> list[date]:
    del current_user
    return await tee_time_service.list_upcoming_dates(season_id=season_id, from_date=from_date)


@router.get(
    "/{tee_time_id}",
    response_model=TeeTimeAvailabilityResponse,
    summary="Get Tee Time",
    responses={404: {"description": "Tee time not found."}},
)
async def get_tee_time(
    tee_time_id: UUID,
    tee_time_service: TeeTimeService = TEE_TIME_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> TeeTimeAvailabilityResponse:
    del current_user
    return await tee_time_service.get_tee_time_availability(tee_time_id)


@router.post(
    "/manual",
    response_model=ManualTeeTimesResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Manual Tee Times (Admin)",
    description="Creates one-off tee times; times already on the sheet are skipped.",
    responses={404: {"description": "Season not found."}},
)
async def post_manual_tee_times(
    request: ManualTeeTimesRequest,
    tee_time_service: TeeTimeService = TEE_TIME_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> ManualTeeTimesResponse:
    del admin_user
    return await tee_time_service.create_manual_tee_times(request)


@router.patch(
    "/{tee_time_id}/availability",
    response_model=TeeTimeAvailabilityResponse,
    summary="Show Or Hide Tee Time (Admin)",
    description="Manual override; existing reservations are not affected.",
    responses={404: {"description": "Tee time not found."}},
)
async def patch_availability(
    tee_time_id: UUID,
    request: AvailabilityUpdateRequest,
    tee_time_service: TeeTimeService = TEE_TIME_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> TeeTimeAvailabilityResponse:
    del admin_user
    return await tee_time_service.set_manual_availability(tee_time_id, request.is_available)


@router.post(
    "/availability/bulk",
    response_model=BulkAvailabilityResponse,
    summary="Bulk Show Or Hide (Admin)",
    responses={404: {"description": "One or more tee times not found."}},
)
async def post_bulk_availability(
    request: BulkAvailabilityRequest,
    tee_time_service: TeeTimeService = TEE_TIME_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> BulkAvailabilityResponse:
    del admin_user
    updated = await tee_time_service.bulk_set_availability(request.items)
    return BulkAvailabilityResponse(updated=updated)


@router.delete(
    "/{tee_time_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Tee Time (Admin)",
    responses={
        404: {"description": "Tee time not found."},
        409: {"description": "Tee time still has reservations."},
    },
)
async def delete_tee_time(
    tee_time_id: UUID,
    tee_time_service: TeeTimeService = TEE_TIME_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> Response:
    del admin_user
    await tee_time_service.delete_tee_time(tee_time_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
