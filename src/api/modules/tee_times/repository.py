from __future__ import annotations

from collections.abc import Iterable
from datetime import date, time
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from api.db.models import Reservation, Season, TeeTime


class TeeTimeRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, tee_time_id: UUID) -> TeeTime | None:
        return await self.session.get(TeeTime, tee_time_id)

    async def lock_for_update(self, tee_time_id: UUID) -> bool:
        """Bump ``lock_version`` to take the write lock this tee time's
        reserve/cancel/delete transactions serialize on. False if missing."""
        stmt = (
            update(TeeTime)
            .where(col(TeeTime.id) == tee_time_id)
            .values(lock_version=col(TeeTime.lock_version) + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return bool(result.rowcount)

    async def get_fresh(self, tee_time_id: UUID) -> TeeTime | None:
        stmt = (
            select(TeeTime)
            .where(col(TeeTime.id) == tee_time_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_season(self, season_id: UUID) -> Season | None:
        return await self.session.get(Season, season_id)

    async def list_on_date(self, play_date: date, at: time | None = None) -> list[TeeTime]:
        stmt = select(TeeTime).where(TeeTime.date == play_date)
        if at is not None:
            stmt = stmt.where(TeeTime.time == at)
        result = await self.session.execute(stmt.order_by(col(TeeTime.time)))
        return list(result.scalars().all())

    async def list_by_ids(self, tee_time_ids: Iterable[UUID]) -> list[TeeTime]:
        wanted = list(set(tee_time_ids))
        if not wanted:
            return []
        result = await self.session.execute(select(TeeTime).where(col(TeeTime.id).in_(wanted)))
        return list(result.scalars().all())

    async def reserved_slots(self, tee_time_ids: Iterable[UUID]) -> dict[UUID, int]:
        wanted = list(set(tee_time_ids))
        if not wanted:
            return {}
        stmt = (
            select(Reservation.tee_time_id, func.coalesce(func.sum(Reservation.slots), 0))
            .where(col(Reservation.tee_time_id).in_(wanted))
            .group_by(col(Reservation.tee_time_id))
        )
        result = await self.session.execute(stmt)
        return {tee_time_id: int(total) for tee_time_id, total in result.all()}

    async def list_dates(self, *, season_id: UUID | None, from_date: date) -> list[date]:
        stmt = select(TeeTime.date).distinct().where(TeeTime.date >= from_date)
        if season_id is not None:
            stmt = stmt.where(TeeTime.season_id == season_id)
        result = await self.session.execute(stmt.order_by(col(TeeTime.date)))
        return list(result.scalars().all())

    async def existing_times(self, play_date: date) -> set[time]:
        result = await self.session.execute(
            select(TeeTime.time).where(TeeTime.date == play_date)
        )
        return set(result.scalars().all())

    async def count_reservations(self, tee_time_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(Reservation)
            .where(Reservation.tee_time_id == tee_time_id)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    def add(self, tee_time: TeeTime) -> None:
        self.session.add(tee_time)

    async def delete(self, tee_time: TeeTime) -> None:
        await self.session.delete(tee_time)
        await self.session.commit()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
