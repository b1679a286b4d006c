from __future__ import annotations

from collections.abc import Iterable
from datetime import date, time
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from api.db.models import Season, TeeTime, TeeTimeTemplate


class ScheduleRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_season(self, season_id: UUID) -> Season | None:
        return await self.session.get(Season, season_id)

    async def get_template(self, template_id: UUID) -> TeeTimeTemplate | None:
        return await self.session.get(TeeTimeTemplate, template_id)

    async def get_template_for_day(
        self, season_id: UUID, day_of_week: int
    ) -> TeeTimeTemplate | None:
        stmt = (
            select(TeeTimeTemplate)
            .where(TeeTimeTemplate.season_id == season_id)
            .where(TeeTimeTemplate.day_of_week == day_of_week)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_templates(self, season_id: UUID) -> list[TeeTimeTemplate]:
        stmt = (
            select(TeeTimeTemplate)
            .where(TeeTimeTemplate.season_id == season_id)
            .order_by(col(TeeTimeTemplate.day_of_week))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def save_template(self, template: TeeTimeTemplate) -> TeeTimeTemplate:
        self.session.add(template)
        await self.session.commit()
        await self.session.refresh(template)
        return template

    async def delete_template(self, template: TeeTimeTemplate) -> None:
        # Generated tee times outlive their template.
        await self.session.execute(
            update(TeeTime)
            .where(col(TeeTime.template_id) == template.id)
            .values(template_id=None)
        )
        await self.session.delete(template)
        await self.session.commit()

    async def tee_times_on_dates(self, dates: Iterable[date]) -> dict[tuple[date, time], TeeTime]:
        wanted = sorted(set(dates))
        if not wanted:
            return {}
        stmt = select(TeeTime).where(col(TeeTime.date).in_(wanted))
        result = await self.session.execute(stmt)
        return {(row.date, row.time): row for row in result.scalars().all()}

    def add_tee_time(self, tee_time: TeeTime) -> None:
        self.session.add(tee_time)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
