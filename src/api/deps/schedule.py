from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.config.settings import Settings, get_settings
from api.db.session import get_session
from api.modules.schedule.repository import ScheduleRepository
from api.modules.schedule.service import ScheduleService

SESSION_DEP = Depends(get_session)
SETTINGS_DEP = Depends(get_settings)


def get_schedule_service_dep(
    session: AsyncSession = SESSION_DEP,
    settings: Settings = SETTINGS_DEP,
) -> ScheduleService:
    return ScheduleService(repository=ScheduleRepository(session=session), settings=settings)
