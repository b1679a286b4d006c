from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from uuid import UUID

from api.config.settings import Settings
from api.db.enums import TeeTimeOrigin
from api.db.models import TeeTime
from api.modules.tee_times.repository import TeeTimeRepository
from api.modules.tee_times.schemas import (
    BulkAvailabilityItem,
    ManualTeeTimesRequest,
    ManualTeeTimesResponse,
    TeeTimeAvailabilityResponse,
)
from league.availability import Clock, compute_availability, utc_now
from league.errors import NotFoundError, TeeTimeInUseError, ValidationError
from league.schedule import (
    BookingRule,
    booking_window,
    format_clock,
    league_weekday,
    normalize_time_slots,
    parse_clock,
    resolve_timezone,
)

logger = logging.getLogger(__name__)


class TeeTimeService:
    def __init__(
        self,
        repository: TeeTimeRepository,
        settings: Settings,
        clock: Clock = utc_now,
    ) -> None:
        self.repository = repository
        self.settings = settings
        self.clock = clock

    def to_availability(
        self, tee_time: TeeTime, reserved_slots: int, now: datetime
    ) -> TeeTimeAvailabilityResponse:
        availability = compute_availability(
            max_slots=tee_time.max_slots,
            reserved_slots=reserved_slots,
            booking_opens_at=tee_time.booking_opens_at,
            booking_closes_at=tee_time.booking_closes_at,
            is_available=tee_time.is_available,
            now=now,
        )
        return TeeTimeAvailabilityResponse(
            tee_time_id=tee_time.id,
            date=tee_time.date,
            time=format_clock(tee_time.time),
            max_slots=availability.max_slots,
            reserved_slots=availability.reserved_slots,
            available_slots=availability.available_slots,
            window_status=availability.window_status,
            bookable=availability.bookable,
            is_available=availability.is_available,
            booking_opens_at=tee_time.booking_opens_at,
            booking_closes_at=tee_time.booking_closes_at,
        )

    async def get_availability(
        self, play_date: date, at: str | None = None
    ) -> list[TeeTimeAvailabilityResponse]:
        clock_time = parse_clock(at) if at else None
        tee_times = await self.repository.list_on_date(play_date, clock_time)
        reserved = await self.repository.reserved_slots(tee_time.id for tee_time in tee_times)
        now = self.clock()
        return [
            self.to_availability(tee_time, reserved.get(tee_time.id, 0), now)
            for tee_time in tee_times
        ]

    async def get_tee_time_availability(self, tee_time_id: UUID) -> TeeTimeAvailabilityResponse:
        tee_time = await self.repository.get_by_id(tee_time_id)
        if tee_time is None:
            raise NotFoundError(f"Tee time not found: {tee_time_id}")
        reserved = await self.repository.reserved_slots([tee_time_id])
        return self.to_availability(tee_time, reserved.get(tee_time_id, 0), self.clock())

    async def list_upcoming_dates(
        self, *, season_id: UUID | None = None, from_date: date | None = None
    ) -> list[date]:
        start = from_date if from_date is not None else self.clock().date()
        return await self.repository.list_dates(season_id=season_id, from_date=start)

    async def create_manual_tee_times(
        self, payload: ManualTeeTimesRequest
    ) -> ManualTeeTimesResponse:
        """Add one-off tee times on a date using the league default booking window."""
        if await self.repository.get_season(payload.season_id) is None:
            raise NotFoundError(f"Season not found: {payload.season_id}")
        settings = self.settings
        slots = normalize_time_slots(payload.times)
        max_slots = payload.max_slots or settings.league_default_max_slots
        zone = resolve_timezone(settings.league_default_timezone)
        rule = BookingRule(
            day_of_week=league_weekday(payload.date),
            time_slots=slots,
            max_slots=max_slots,
            opens_days_before=settings.league_booking_opens_days_before,
            opens_time=parse_clock(settings.league_booking_opens_time),
            closes_days_before=settings.league_booking_closes_days_before,
            closes_time=parse_clock(settings.league_booking_closes_time),
            timezone=settings.league_default_timezone,
        )
        opens_at, closes_at = booking_window(payload.date, rule, zone)
        if opens_at >= closes_at:
            raise ValidationError("League default booking window is empty.")

        created: list[str] = []
        skipped: list[str] = []
        try:
            existing = await self.repository.existing_times(payload.date)
            now = utc_now()
            for slot in slots:
                if slot in existing:
                    skipped.append(format_clock(slot))
                    continue
                self.repository.add(
                    TeeTime(
                        season_id=payload.season_id,
                        template_id=None,
                        origin=TeeTimeOrigin.MANUAL,
                        date=payload.date,
                        time=slot,
                        max_slots=max_slots,
                        booking_opens_at=opens_at,
                        booking_closes_at=closes_at,
                        is_available=True,
                        created_at=now,
                        updated_at=now,
                    )
                )
                created.append(format_clock(slot))
            await self.repository.commit()
        except Exception:
            await self.repository.rollback()
            raise
        logger.info(
            "manual_tee_times_created",
            extra={
                "date": payload.date.isoformat(),
                "created_times": created,
                "skipped_times": skipped,
            },
        )
        return ManualTeeTimesResponse(created=created, skipped=skipped)

    async def delete_tee_time(self, tee_time_id: UUID) -> None:
        try:
            if not await self.repository.lock_for_update(tee_time_id):
                raise NotFoundError(f"Tee time not found: {tee_time_id}")
            reservations = await self.repository.count_reservations(tee_time_id)
            if reservations:
                raise TeeTimeInUseError(
                    "Tee time still has reservations.",
                    details={"reservations": reservations},
                )
            tee_time = await self.repository.get_fresh(tee_time_id)
            if tee_time is None:
                raise NotFoundError(f"Tee time not found: {tee_time_id}")
            await self.repository.delete(tee_time)
        except Exception:
            await self.repository.rollback()
            raise
        logger.info("tee_time_deleted", extra={"tee_time_id": str(tee_time_id)})

    async def set_manual_availability(
        self, tee_time_id: UUID, is_available: bool
    ) -> TeeTimeAvailabilityResponse:
        tee_time = await self.repository.get_by_id(tee_time_id)
        if tee_time is None:
            raise NotFoundError(f"Tee time not found: {tee_time_id}")
        tee_time.is_available = is_available
        tee_time.updated_at = utc_now()
        self.repository.add(tee_time)
        await self.repository.commit()
        logger.info(
            "tee_time_availability_changed",
            extra={"tee_time_id": str(tee_time_id), "is_available": is_available},
        )
        return await self.get_tee_time_availability(tee_time_id)

    async def bulk_set_availability(self, items: Iterable[BulkAvailabilityItem]) -> int:
        wanted = {item.tee_time_id: item.is_available for item in items}
        tee_times = await self.repository.list_by_ids(wanted)
        found = {tee_time.id for tee_time in tee_times}
        missing = [str(tee_time_id) for tee_time_id in wanted if tee_time_id not in found]
        if missing:
            raise NotFoundError("Tee times not found.", details={"tee_time_ids": missing})
        now = utc_now()
        for tee_time in tee_times:
            tee_time.is_available = wanted[tee_time.id]
            tee_time.updated_at = now
            self.repository.add(tee_time)
        await self.repository.commit()
        for tee_time in tee_times:
            logger.info(
                "tee_time_availability_changed",
                extra={"tee_time_id": str(tee_time.id), "is_available": tee_time.is_available},
            )
        return len(tee_times)
