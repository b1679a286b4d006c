from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.db.session import get_session
from api.modules.seasons.repository import SeasonRepository
from api.modules.seasons.service import SeasonService

SESSION_DEP = Depends(get_session)


def get_season_service_dep(session: AsyncSession = SESSION_DEP) -> SeasonService:
    return SeasonService(repository=SeasonRepository(session=session))
