from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from api.common.schemas import OffsetPage
from api.db.models import User
from api.deps.auth import get_admin_user_dep, get_current_user_dep
from api.deps.reservations import get_reservation_service_dep
from api.modules.reservations.schemas import (
    AdminReservationCreateRequest,
    ReservationCreateRequest,
    ReservationDetailResponse,
    ReservationResponse,
)
from api.modules.reservations.service import ReservationService

router = APIRouter(prefix="/reservations", tags=["reservations"])
RESERVATION_SERVICE_DEP = Depends(get_reservation_service_dep)
CURRENT_USER_DEP = Depends(get_current_user_dep)
ADMIN_USER_DEP = Depends(get_admin_user_dep)


@router.post(
    "",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Reserve Tee Time",
    description=(
        "Books seats on a tee time for the current member. The first seat is the "
        "member; player_names lists the other players."
    ),
    responses={
        201: {"description": "Reservation created."},
        404: {"description": "Tee time not found."},
        409: {"description": "Booking window closed or not enough seats left."},
        422: {"description": "Invalid slot count or player lists."},
    },
)
async def post_reservation(
    request: ReservationCreateRequest,
    reservation_service: ReservationService = RESERVATION_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> ReservationResponse:
    reservation = await reservation_service.reserve(
        tee_time_id=request.tee_time_id,
        user_id=current_user.id,
        slots=request.slots,
        player_names=request.player_names,
        play_for_money=request.play_for_money,
    )
    return ReservationResponse.model_validate(reservation)


@router.post(
    "/admin",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Reserve For Member (Admin)",
    description="Books on behalf of a member regardless of booking window; capacity still applies.",
    responses={
        404: {"description": "Tee time or member not found."},
        409: {"description": "Not enough seats left."},
    },
)
async def post_admin_reservation(
    request: AdminReservationCreateRequest,
    reservation_service: ReservationService = RESERVATION_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> ReservationResponse:
    del admin_user
    reservation = await reservation_service.reserve_for_member(
        tee_time_id=request.tee_time_id,
        user_id=request.user_id,
        slots=request.slots,
        player_names=request.player_names,
        play_for_money=request.play_for_money,
    )
    return ReservationResponse.model_validate(reservation)


@router.get(
    "/me",
    response_model=list[ReservationDetailResponse],
    summary="My Reservations",
    description="Returns the member's reservations ordered by tee time.",
)
async def list_my_reservations(
    upcoming_only: bool = True,
    reservation_service: ReservationService = RESERVATION_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> list[ReservationDetailResponse]:
    return await reservation_service.list_my_reservations(
        current_user.id, upcoming_only=upcoming_only
    )


@router.get(
    "",
    response_model=OffsetPage[ReservationDetailResponse],
    summary="List Reservations (Admin)",
)
async def list_reservations(
    limit: int = 50,
    offset: int = 0,
    reservation_service: ReservationService = RESERVATION_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> OffsetPage[ReservationDetailResponse]:
    del admin_user
    return await reservation_service.list_reservations(limit=limit, offset=offset)


@router.get(
    "/tee-times/{tee_time_id}",
    response_model=list[ReservationDetailResponse],
    summary="Reservations On Tee Time (Admin)",
    responses={404: {"description": "Tee time not found."}},
)
async def list_tee_time_reservations(
    tee_time_id: UUID,
    reservation_service: ReservationService = RESERVATION_SERVICE_DEP,
    admin_user: User = ADMIN_USER_DEP,
) -> list[ReservationDetailResponse]:
    del admin_user
    return await reservation_service.list_reservations_for_tee_time(tee_time_id)


@router.delete(
    "/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel Reservation",
    description="Owners cancel their own reservations; admins may cancel any.",
    responses={
        403: {"description": "Reservation belongs to another member."},
        404: {"description": "Reservation not found."},
    },
)
async def delete_reservation(
    reservation_id: UUID,
    reservation_service: ReservationService = RESERVATION_SERVICE_DEP,
    current_user: User = CURRENT_USER_DEP,
) -> Response:
    await reservation_service.cancel(
        reservation_id,
        current_user.id,
        is_admin=current_user.is_admin,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
