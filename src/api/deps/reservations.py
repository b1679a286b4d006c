from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.db.session import get_session
from api.deps.clock import get_clock
from api.modules.reservations.repository import ReservationRepository
from api.modules.reservations.service import ReservationService
from api.modules.tee_times.repository import TeeTimeRepository
from league.availability import Clock

SESSION_DEP = Depends(get_session)
CLOCK_DEP = Depends(get_clock)


def get_reservation_service_dep(
    session: AsyncSession = SESSION_DEP,
    clock: Clock = CLOCK_DEP,
) -> ReservationService:
    return ReservationService(
        repository=ReservationRepository(session=session),
        tee_time_repository=TeeTimeRepository(session=session),
        clock=clock,
    )
