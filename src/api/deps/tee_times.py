from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.config.settings import Settings, get_settings
from api.db.session import get_session
from api.deps.clock import get_clock
from api.modules.tee_times.repository import TeeTimeRepository
from api.modules.tee_times.service import TeeTimeService
from league.availability import Clock

SESSION_DEP = Depends(get_session)
SETTINGS_DEP = Depends(get_settings)
CLOCK_DEP = Depends(get_clock)


def get_tee_time_service_dep(
    session: AsyncSession = SESSION_DEP,
    settings: Settings = SETTINGS_DEP,
    clock: Clock = CLOCK_DEP,
) -> TeeTimeService:
    return TeeTimeService(
        repository=TeeTimeRepository(session=session),
        settings=settings,
        clock=clock,
    )
