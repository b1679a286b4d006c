from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TypeVar
from uuid import UUID

from api.config.settings import Settings
from api.db.enums import TeeTimeOrigin
from api.db.models import TeeTime, TeeTimeTemplate
from api.modules.schedule.repository import ScheduleRepository
from api.modules.schedule.schemas import TemplateSaveRequest
from league.availability import utc_now
from league.errors import ConflictError, NotFoundError, ValidationError
from league.schedule import (
    BookingRule,
    PlannedTeeTime,
    expand_template,
    format_clock,
    normalize_time_slots,
    parse_clock,
    resolve_timezone,
    validate_window_offsets,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class GenerationResult:
    created_count: int
    updated_count: int
    dates: list[date]


def rule_from_template(template: TeeTimeTemplate) -> BookingRule:
    return BookingRule(
        day_of_week=template.day_of_week,
        time_slots=normalize_time_slots(template.time_slots),
        max_slots=template.max_slots_per_time,
        opens_days_before=template.booking_opens_days_before,
        opens_time=parse_clock(template.booking_opens_time),
        closes_days_before=template.booking_closes_days_before,
        closes_time=parse_clock(template.booking_closes_time),
        timezone=template.timezone,
    )


class ScheduleService:
    def __init__(self, repository: ScheduleRepository, settings: Settings) -> None:
        self.repository = repository
        self.settings = settings

    async def save_template(self, payload: TemplateSaveRequest) -> TeeTimeTemplate:
        """Create or replace the template for ``(season_id, day_of_week)``."""
        if await self.repository.get_season(payload.season_id) is None:
            raise NotFoundError(f"Season not found: {payload.season_id}")

        settings = self.settings
        slots = normalize_time_slots(payload.time_slots)
        max_slots = (
            payload.max_slots_per_time
            if payload.max_slots_per_time is not None
            else settings.league_default_max_slots
        )
        if max_slots < 1:
            raise ValidationError("max_slots_per_time must be at least 1.")
        opens_days = _pick(payload.booking_opens_days_before, settings.league_booking_opens_days_before)
        closes_days = _pick(
            payload.booking_closes_days_before, settings.league_booking_closes_days_before
        )
        opens_time = parse_clock(_pick(payload.booking_opens_time, settings.league_booking_opens_time))
        closes_time = parse_clock(
            _pick(payload.booking_closes_time, settings.league_booking_closes_time)
        )
        zone_name = _pick(payload.timezone, settings.league_default_timezone)
        resolve_timezone(zone_name)
        validate_window_offsets(
            opens_days_before=opens_days,
            opens_time=opens_time,
            closes_days_before=closes_days,
            closes_time=closes_time,
        )

        now = utc_now()
        template = await self.repository.get_template_for_day(
            payload.season_id, payload.day_of_week
        )
        if template is None:
            template = TeeTimeTemplate(
                season_id=payload.season_id,
                day_of_week=payload.day_of_week,
                created_at=now,
                booking_opens_days_before=opens_days,
                booking_opens_time=format_clock(opens_time),
                booking_closes_days_before=closes_days,
                booking_closes_time=format_clock(closes_time),
                timezone=zone_name,
            )
        template.time_slots = [format_clock(slot) for slot in slots]
        template.max_slots_per_time = max_slots
        template.booking_opens_days_before = opens_days
        template.booking_opens_time = format_clock(opens_time)
        template.booking_closes_days_before = closes_days
        template.booking_closes_time = format_clock(closes_time)
        template.timezone = zone_name
        template.updated_at = now
        saved = await self.repository.save_template(template)
        logger.info(
            "template_saved",
            extra={
                "template_id": str(saved.id),
                "season_id": str(saved.season_id),
                "day_of_week": saved.day_of_week,
                "time_slots": saved.time_slots,
            },
        )
        return saved

    async def get_template(self, template_id: UUID) -> TeeTimeTemplate:
        template = await self.repository.get_template(template_id)
        if template is None:
            raise NotFoundError(f"Template not found: {template_id}")
        return template

    async def list_templates(self, season_id: UUID) -> list[TeeTimeTemplate]:
        return await self.repository.list_templates(season_id)

    async def delete_template(self, template_id: UUID) -> None:
        template = await self.get_template(template_id)
        await self.repository.delete_template(template)
        logger.info("template_deleted", extra={"template_id": str(template_id)})

    async def generate_slots(self, template_id: UUID) -> GenerationResult:
        template = await self.get_template(template_id)
        planned = await self._plan(template)
        return await self._apply([(template, planned)])

    async def generate_for_season(self, season_id: UUID) -> GenerationResult:
        if await self.repository.get_season(season_id) is None:
            raise NotFoundError(f"Season not found: {season_id}")
        templates = await self.repository.list_templates(season_id)
        # Expand everything first so one bad template leaves the season untouched.
        batches = [(template, await self._plan(template)) for template in templates]
        return await self._apply(batches)

    async def _plan(self, template: TeeTimeTemplate) -> list[PlannedTeeTime]:
        season = await self.repository.get_season(template.season_id)
        if season is None:
            raise NotFoundError(f"Season not found: {template.season_id}")
        try:
            return expand_template(rule_from_template(template), season.start_date, season.end_date)
        except ConflictError as exc:
            logger.warning(
                "template_generation_rejected",
                extra={"template_id": str(template.id), "dates": (exc.details or {}).get("dates")},
            )
            raise

    async def _apply(
        self, batches: list[tuple[TeeTimeTemplate, list[PlannedTeeTime]]]
    ) -> GenerationResult:
        all_dates = {slot.date for _, planned in batches for slot in planned}
        created = 0
        updated = 0
        try:
            existing = await self.repository.tee_times_on_dates(all_dates)
            now = utc_now()
            for template, planned in batches:
                template_created = 0
                template_updated = 0
                for slot in planned:
                    tee_time = existing.get((slot.date, slot.time))
                    if tee_time is not None:
                        # Window and capacity follow the template; is_available and
                        # reservations belong to admins and members.
                        tee_time.max_slots = slot.max_slots
                        tee_time.booking_opens_at = slot.booking_opens_at
                        tee_time.booking_closes_at = slot.booking_closes_at
                        tee_time.updated_at = now
                        self.repository.add_tee_time(tee_time)
                        template_updated += 1
                        continue
                    tee_time = TeeTime(
                        season_id=template.season_id,
                        template_id=template.id,
                        origin=TeeTimeOrigin.TEMPLATE,
                        date=slot.date,
                        time=slot.time,
                        max_slots=slot.max_slots,
                        booking_opens_at=slot.booking_opens_at,
                        booking_closes_at=slot.booking_closes_at,
                        is_available=True,
                        created_at=now,
                        updated_at=now,
                    )
                    self.repository.add_tee_time(tee_time)
                    existing[(slot.date, slot.time)] = tee_time
                    template_created += 1
                logger.info(
                    "tee_times_generated",
                    extra={
                        "template_id": str(template.id),
                        "created_count": template_created,
                        "updated_count": template_updated,
                    },
                )
                created += template_created
                updated += template_updated
            await self.repository.commit()
        except Exception:
            await self.repository.rollback()
            raise
        return GenerationResult(
            created_count=created,
            updated_count=updated,
            dates=sorted(all_dates),
        )


def _pick(value: T | None, default: T) -> T:
    return default if value is None else value
