from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.config.settings import Settings, get_settings
from api.db.session import get_session
from api.modules.identity.repository import UserRepository
from api.modules.identity.service import IdentityService

SESSION_DEP = Depends(get_session)
SETTINGS_DEP = Depends(get_settings)


def get_identity_service_dep(
    session: AsyncSession = SESSION_DEP,
    settings: Settings = SETTINGS_DEP,
) -> IdentityService:
    return IdentityService(
        user_repository=UserRepository(session=session),
        max_strokes_given=settings.league_max_strokes_given,
    )
