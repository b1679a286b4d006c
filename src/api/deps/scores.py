from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.db.session import get_session
from api.modules.scores.repository import ScoreRepository
from api.modules.scores.service import ScoreService

SESSION_DEP = Depends(get_session)


def get_score_service_dep(session: AsyncSession = SESSION_DEP) -> ScoreService:
    return ScoreService(repository=ScoreRepository(session=session))
