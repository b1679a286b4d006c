from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from api.db.models import Round, Score, Season, User


class ScoreRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_season(self, season_id: UUID) -> Season | None:
        return await self.session.get(Season, season_id)

    async def get_active_season(self) -> Season | None:
        stmt = select(Season).where(col(Season.is_active)).order_by(col(Season.year).desc())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_user(self, user_id: UUID) -> User | None:
        return await self.session.get(User, user_id)

    async def get_users(self, user_ids: Iterable[UUID]) -> dict[UUID, User]:
        wanted = list(set(user_ids))
        if not wanted:
            return {}
        result = await self.session.execute(select(User).where(col(User.id).in_(wanted)))
        return {user.id: user for user in result.scalars().all()}

    async def get_round(self, round_id: UUID) -> Round | None:
        return await self.session.get(Round, round_id)

    async def get_score(self, score_id: UUID) -> Score | None:
        return await self.session.get(Score, score_id)

    async def list_rounds(self, season_id: UUID, *, user_id: UUID | None = None) -> list[Round]:
        stmt = select(Round).where(Round.season_id == season_id)
        if user_id is not None:
            stmt = stmt.where(
                col(Round.id).in_(select(Score.round_id).where(Score.user_id == user_id))
            )
        stmt = stmt.order_by(col(Round.date).desc(), col(Round.created_at).desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def scores_for_rounds(self, round_ids: Iterable[UUID]) -> list[tuple[Score, User]]:
        wanted = list(set(round_ids))
        if not wanted:
            return []
        stmt = (
            select(Score, User)
            .join(User, col(User.id) == col(Score.user_id))
            .where(col(Score.round_id).in_(wanted))
            .order_by(col(Score.total_score), func.lower(col(User.name)))
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def season_scores(
        self, season_id: UUID, *, user_id: UUID | None = None
    ) -> list[tuple[Score, User]]:
        stmt = (
            select(Score, User)
            .join(Round, col(Round.id) == col(Score.round_id))
            .join(User, col(User.id) == col(Score.user_id))
            .where(Round.season_id == season_id)
        )
        if user_id is not None:
            stmt = stmt.where(Score.user_id == user_id)
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    def add(self, item: Round | Score) -> None:
        self.session.add(item)

    async def flush(self) -> None:
        await self.session.flush()

    async def delete_round(self, round_: Round) -> None:
        await self.session.execute(delete(Score).where(col(Score.round_id) == round_.id))
        await self.session.delete(round_)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
