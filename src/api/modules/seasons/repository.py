from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from api.db.models import Round, Season, TeeTime, TeeTimeTemplate


class SeasonRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, season: Season) -> Season:
        self.session.add(season)
        await self.session.commit()
        await self.session.refresh(season)
        return season

    async def save(self, season: Season) -> Season:
        self.session.add(season)
        await self.session.commit()
        await self.session.refresh(season)
        return season

    async def get_by_id(self, season_id: UUID) -> Season | None:
        return await self.session.get(Season, season_id)

    async def get_by_year(self, year: int) -> Season | None:
        result = await self.session.execute(select(Season).where(Season.year == year))
        return result.scalars().first()

    async def get_active(self) -> Season | None:
        stmt = select(Season).where(col(Season.is_active)).order_by(col(Season.year).desc())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_all(self) -> list[Season]:
        result = await self.session.execute(select(Season).order_by(col(Season.year).desc()))
        return list(result.scalars().all())

    async def activate(self, season: Season) -> Season:
        await self.session.execute(
            update(Season).where(col(Season.id) != season.id).values(is_active=False)
        )
        season.is_active = True
        self.session.add(season)
        await self.session.commit()
        await self.session.refresh(season)
        return season

    async def count_dependents(self, season_id: UUID) -> int:
        total = 0
        for model in (TeeTimeTemplate, TeeTime, Round):
            stmt = select(func.count()).select_from(model).where(model.season_id == season_id)
            result = await self.session.execute(stmt)
            total += int(result.scalar_one())
        return total

    async def delete(self, season: Season) -> None:
        await self.session.delete(season)
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
