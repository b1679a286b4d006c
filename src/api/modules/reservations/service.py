from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import UUID

from api.common.pagination import build_page, clamp_page
from api.common.schemas import OffsetPage
from api.db.models import Reservation, TeeTime, User
from api.modules.reservations.repository import ReservationRepository
from api.modules.reservations.schemas import ReservationDetailResponse
from api.modules.tee_times.repository import TeeTimeRepository
from league.availability import Clock, WindowStatus, compute_availability, utc_now
from league.errors import (
    CapacityError,
    ForbiddenError,
    LeagueError,
    NotFoundError,
    ValidationError,
    WindowClosedError,
)
from league.schedule import format_clock

MAX_PLAYER_NAME_LENGTH = 100

logger = logging.getLogger(__name__)


def clean_player_names(player_names: Sequence[str], slots: int) -> list[str]:
    if len(player_names) != slots - 1:
        raise ValidationError(
            f"Expected {slots - 1} additional player name(s) for {slots} slot(s), "
            f"got {len(player_names)}."
        )
    cleaned: list[str] = []
    for position, raw in enumerate(player_names, start=2):
        name = raw.strip()
        if not name:
            raise ValidationError(f"Player {position} name cannot be blank.")
        if len(name) > MAX_PLAYER_NAME_LENGTH:
            raise ValidationError(
                f"Player {position} name exceeds {MAX_PLAYER_NAME_LENGTH} characters."
            )
        cleaned.append(name)
    return cleaned


class ReservationService:
    def __init__(
        self,
        repository: ReservationRepository,
        tee_time_repository: TeeTimeRepository,
        clock: Clock = utc_now,
    ) -> None:
        self.repository = repository
        self.tee_time_repository = tee_time_repository
        self.clock = clock

    async def reserve(
        self,
        *,
        tee_time_id: UUID,
        user_id: UUID,
        slots: int,
        player_names: Sequence[str],
        play_for_money: Sequence[bool],
    ) -> Reservation:
        """Book ``slots`` seats for ``user_id`` if the tee time is bookable now."""
        return await self._book(
            tee_time_id=tee_time_id,
            user_id=user_id,
            slots=slots,
            player_names=player_names,
            play_for_money=play_for_money,
            enforce_window=True,
        )

    async def reserve_for_member(
        self,
        *,
        tee_time_id: UUID,
        user_id: UUID,
        slots: int,
        player_names: Sequence[str],
        play_for_money: Sequence[bool],
    ) -> Reservation:
        """Admin booking: ignores window and availability flag, never capacity."""
        if await self.repository.get_user(user_id) is None:
            raise NotFoundError(f"User not found: {user_id}")
        return await self._book(
            tee_time_id=tee_time_id,
            user_id=user_id,
            slots=slots,
            player_names=player_names,
            play_for_money=play_for_money,
            enforce_window=False,
        )

    async def _book(
        self,
        *,
        tee_time_id: UUID,
        user_id: UUID,
        slots: int,
        player_names: Sequence[str],
        play_for_money: Sequence[bool],
        enforce_window: bool,
    ) -> Reservation:
        try:
            if slots < 1:
                raise ValidationError("slots must be at least 1.")
            names = clean_player_names(player_names, slots)
            if len(play_for_money) != slots:
                raise ValidationError(
                    f"Expected {slots} play-for-money flag(s), got {len(play_for_money)}."
                )

            # Capacity check and insert run in one transaction that holds the
            # tee time's write lock, so concurrent bookings see each other.
            if not await self.tee_time_repository.lock_for_update(tee_time_id):
                raise NotFoundError(f"Tee time not found: {tee_time_id}")
            tee_time = await self.tee_time_repository.get_fresh(tee_time_id)
            if tee_time is None:
                raise NotFoundError(f"Tee time not found: {tee_time_id}")
            if slots > tee_time.max_slots:
                raise ValidationError(
                    f"slots must be between 1 and {tee_time.max_slots}.",
                    details={"max_slots": tee_time.max_slots},
                )

            reserved = await self.repository.sum_slots(tee_time_id)
            availability = compute_availability(
                max_slots=tee_time.max_slots,
                reserved_slots=reserved,
                booking_opens_at=tee_time.booking_opens_at,
                booking_closes_at=tee_time.booking_closes_at,
                is_available=tee_time.is_available,
                now=self.clock(),
            )
            if enforce_window:
                if not availability.is_available:
                    raise WindowClosedError("This tee time is not available for booking.")
                if availability.window_status != WindowStatus.OPEN:
                    raise WindowClosedError(
                        f"Booking window is {availability.window_status.value}.",
                        details={
                            "window_status": availability.window_status.value,
                            "booking_opens_at": tee_time.booking_opens_at.isoformat(),
                            "booking_closes_at": tee_time.booking_closes_at.isoformat(),
                        },
                    )
            if slots > availability.available_slots:
                raise CapacityError(
                    f"Only {availability.available_slots} slot(s) left.",
                    details={"available_slots": availability.available_slots},
                )

            reservation = Reservation(
                tee_time_id=tee_time_id,
                user_id=user_id,
                slots=slots,
                player_names=names,
                play_for_money=list(play_for_money),
                created_at=utc_now(),
            )
            self.repository.add(reservation)
            await self.repository.commit()
        except LeagueError as exc:
            await self.repository.rollback()
            logger.info(
                "reservation_rejected",
                extra={
                    "tee_time_id": str(tee_time_id),
                    "user_id": str(user_id),
                    "slots": slots,
                    "kind": exc.kind,
                },
            )
            raise
        except Exception:
            await self.repository.rollback()
            raise

        logger.info(
            "reservation_created",
            extra={
                "reservation_id": str(reservation.id),
                "tee_time_id": str(tee_time_id),
                "user_id": str(user_id),
                "slots": slots,
                "available_slots": availability.available_slots - slots,
            },
        )
        return reservation

    async def cancel(
        self, reservation_id: UUID, requesting_user_id: UUID, *, is_admin: bool = False
    ) -> None:
        reservation = await self.repository.get_by_id(reservation_id)
        if reservation is None:
            raise NotFoundError(f"Reservation not found: {reservation_id}")
        if reservation.user_id != requesting_user_id and not is_admin:
            raise ForbiddenError("You can only cancel your own reservations.")

        tee_time_id = reservation.tee_time_id
        slots = reservation.slots
        try:
            await self.tee_time_repository.lock_for_update(tee_time_id)
            # A concurrent cancel may have won the lock first.
            current = await self.repository.get_fresh(reservation_id)
            if current is None:
                raise NotFoundError(f"Reservation not found: {reservation_id}")
            await self.repository.delete(current)
            await self.repository.commit()
        except Exception:
            await self.repository.rollback()
            raise
        logger.info(
            "reservation_canceled",
            extra={
                "reservation_id": str(reservation_id),
                "tee_time_id": str(tee_time_id),
                "canceled_by": str(requesting_user_id),
                "slots": slots,
            },
        )

    async def list_my_reservations(
        self, user_id: UUID, *, upcoming_only: bool = True
    ) -> list[ReservationDetailResponse]:
        from_date = self.clock().date() if upcoming_only else None
        rows = await self.repository.list_for_user(user_id, from_date=from_date)
        return [_detail(*row) for row in rows]

    async def list_reservations_for_tee_time(
        self, tee_time_id: UUID
    ) -> list[ReservationDetailResponse]:
        if await self.tee_time_repository.get_by_id(tee_time_id) is None:
            raise NotFoundError(f"Tee time not found: {tee_time_id}")
        rows = await self.repository.list_for_tee_time(tee_time_id)
        return [_detail(*row) for row in rows]

    async def list_reservations(
        self, *, limit: int = 50, offset: int = 0
    ) -> OffsetPage[ReservationDetailResponse]:
        safe_limit, safe_offset = clamp_page(limit, offset)
        total = await self.repository.count_all()
        rows = await self.repository.list_page(limit=safe_limit, offset=safe_offset)
        return build_page(
            items=[_detail(*row) for row in rows],
            total=total,
            limit=safe_limit,
            offset=safe_offset,
        )


def _detail(reservation: Reservation, tee_time: TeeTime, user: User) -> ReservationDetailResponse:
    return ReservationDetailResponse(
        id=reservation.id,
        tee_time_id=reservation.tee_time_id,
        user_id=reservation.user_id,
        slots=reservation.slots,
        player_names=list(reservation.player_names),
        play_for_money=list(reservation.play_for_money),
        created_at=reservation.created_at,
        date=tee_time.date,
        time=format_clock(tee_time.time),
        member_name=user.name or user.username,
    )
