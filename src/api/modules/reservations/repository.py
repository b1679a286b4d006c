from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from api.db.models import Reservation, TeeTime, User


class ReservationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def add(self, reservation: Reservation) -> None:
        self.session.add(reservation)

    async def get_by_id(self, reservation_id: UUID) -> Reservation | None:
        return await self.session.get(Reservation, reservation_id)

    async def get_fresh(self, reservation_id: UUID) -> Reservation | None:
        return await self.session.get(Reservation, reservation_id, populate_existing=True)

    async def get_user(self, user_id: UUID) -> User | None:
        return await self.session.get(User, user_id)

    async def sum_slots(self, tee_time_id: UUID) -> int:
        stmt = select(func.coalesce(func.sum(Reservation.slots), 0)).where(
            Reservation.tee_time_id == tee_time_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def list_for_user(
        self, user_id: UUID, *, from_date: date | None = None
    ) -> list[tuple[Reservation, TeeTime, User]]:
        stmt = (
            select(Reservation, TeeTime, User)
            .join(TeeTime, col(TeeTime.id) == col(Reservation.tee_time_id))
            .join(User, col(User.id) == col(Reservation.user_id))
            .where(Reservation.user_id == user_id)
        )
        if from_date is not None:
            stmt = stmt.where(TeeTime.date >= from_date)
        stmt = stmt.order_by(col(TeeTime.date), col(TeeTime.time))
        result = await self.session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def list_for_tee_time(
        self, tee_time_id: UUID
    ) -> list[tuple[Reservation, TeeTime, User]]:
        stmt = (
            select(Reservation, TeeTime, User)
            .join(TeeTime, col(TeeTime.id) == col(Reservation.tee_time_id))
            .join(User, col(User.id) == col(Reservation.user_id))
            .where(Reservation.tee_time_id == tee_time_id)
            .order_by(col(Reservation.created_at))
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def count_all(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Reservation))
        return int(result.scalar_one())

    async def list_page(
        self, *, limit: int, offset: int
    ) -> list[tuple[Reservation, TeeTime, User]]:
        stmt = (
            select(Reservation, TeeTime, User)
            .join(TeeTime, col(TeeTime.id) == col(Reservation.tee_time_id))
            .join(User, col(User.id) == col(Reservation.user_id))
            .order_by(col(TeeTime.date).desc(), col(TeeTime.time), col(Reservation.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def delete(self, reservation: Reservation) -> None:
        await self.session.delete(reservation)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
