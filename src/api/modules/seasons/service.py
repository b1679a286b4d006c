from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from api.db.models import Season
from api.modules.seasons.repository import SeasonRepository
from api.modules.seasons.schemas import SeasonCreateRequest
from league.errors import NotFoundError, SeasonInUseError, ValidationError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _check_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise ValidationError("Season start_date must be on or before end_date.")


class SeasonService:
    def __init__(self, repository: SeasonRepository) -> None:
        self.repository = repository

    async def create_season(self, payload: SeasonCreateRequest) -> Season:
        _check_range(payload.start_date, payload.end_date)
        if await self.repository.get_by_year(payload.year) is not None:
            raise ValidationError(f"A season already exists for {payload.year}.")
        now = utcnow()
        season = Season(
            year=payload.year,
            name=payload.name.strip(),
            start_date=payload.start_date,
            end_date=payload.end_date,
            is_active=False,
            created_at=now,
            updated_at=now,
        )
        try:
            created = await self.repository.create(season)
        except IntegrityError as exc:
            await self.repository.rollback()
            raise ValidationError(f"A season already exists for {payload.year}.") from exc
        logger.info("season_created", extra={"season_id": str(created.id), "year": created.year})
        return created

    async def list_seasons(self) -> list[Season]:
        return await self.repository.list_all()

    async def get_season(self, season_id: UUID) -> Season:
        season = await self.repository.get_by_id(season_id)
        if season is None:
            raise NotFoundError(f"Season not found: {season_id}")
        return season

    async def get_active_season(self) -> Season:
        season = await self.repository.get_active()
        if season is None:
            raise NotFoundError("No active season.")
        return season

    async def activate_season(self, season_id: UUID) -> Season:
        season = await self.get_season(season_id)
        season.updated_at = utcnow()
        activated = await self.repository.activate(season)
        logger.info("season_activated", extra={"season_id": str(season_id), "year": season.year})
        return activated

    async def update_season_dates(self, season_id: UUID, start_date: date, end_date: date) -> Season:
        _check_range(start_date, end_date)
        season = await self.get_season(season_id)
        season.start_date = start_date
        season.end_date = end_date
        season.updated_at = utcnow()
        return await self.repository.save(season)

    async def delete_season(self, season_id: UUID) -> None:
        season = await self.get_season(season_id)
        if season.is_active:
            raise SeasonInUseError("The active season cannot be deleted.")
        dependents = await self.repository.count_dependents(season_id)
        if dependents:
            raise SeasonInUseError(
                "Season still has templates, tee times or rounds.",
                details={"dependents": dependents},
            )
        await self.repository.delete(season)
        logger.info("season_deleted", extra={"season_id": str(season_id)})
