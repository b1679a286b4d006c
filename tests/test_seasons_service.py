from __future__ import annotations

import asyncio
import sys
import tempfile
import unittest
from datetime import date
from pathlib import Path
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from api.db.models import TeeTimeTemplate
from api.modules.seasons.repository import SeasonRepository
from api.modules.seasons.schemas import SeasonCreateRequest
from api.modules.seasons.service import SeasonService
from league.errors import NotFoundError, SeasonInUseError, ValidationError


class TestSeasonService(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        db_path = Path(self.tmpdir.name) / "seasons_service.db"
        self.engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", echo=False)
        self.sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        async def _init_db() -> None:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        asyncio.run(_init_db())

    def tearDown(self) -> None:
        async def _dispose() -> None:
            await self.engine.dispose()

        asyncio.run(_dispose())
        self.tmpdir.cleanup()

    @staticmethod
    def _payload(year: int) -> SeasonCreateRequest:
        return SeasonCreateRequest(
            year=year,
            name=f" {year} League ",
            start_date=date(year, 5, 1),
            end_date=date(year, 9, 30),
        )

    def test_only_one_season_is_active(self) -> None:
        async def _run() -> None:
            async with self.sessionmaker() as session:
                service = SeasonService(SeasonRepository(session=session))
                first = await service.create_season(self._payload(2024))
                second = await service.create_season(self._payload(2025))
                self.assertEqual(first.name, "2024 League")
                self.assertFalse(first.is_active)

                with self.assertRaises(NotFoundError):
                    await service.get_active_season()

                await service.activate_season(first.id)
                await service.activate_season(second.id)

            async with self.sessionmaker() as session:
                service = SeasonService(SeasonRepository(session=session))
                active = await service.get_active_season()
                self.assertEqual(active.id, second.id)
                seasons = await service.list_seasons()
                self.assertEqual([season.year for season in seasons], [2025, 2024])
                self.assertEqual([season.is_active for season in seasons], [True, False])

        asyncio.run(_run())

    def test_create_and_update_validation(self) -> None:
        async def _run() -> None:
            async with self.sessionmaker() as session:
                service = SeasonService(SeasonRepository(session=session))
                season = await service.create_season(self._payload(2025))
                with self.assertRaises(ValidationError):
                    await service.create_season(self._payload(2025))
                with self.assertRaises(ValidationError):
                    await service.create_season(
                        SeasonCreateRequest(
                            year=2026,
                            name="Backwards",
                            start_date=date(2026, 9, 30),
                            end_date=date(2026, 5, 1),
                        )
                    )
                with self.assertRaises(ValidationError):
                    await service.update_season_dates(season.id, date(2025, 10, 1), date(2025, 9, 1))

                updated = await service.update_season_dates(
                    season.id, date(2025, 4, 15), date(2025, 10, 15)
                )
                self.assertEqual(updated.start_date, date(2025, 4, 15))
                with self.assertRaises(NotFoundError):
                    await service.update_season_dates(uuid4(), date(2025, 4, 15), date(2025, 10, 15))

        asyncio.run(_run())

    def test_delete_refuses_active_or_referenced_seasons(self) -> None:
        async def _run() -> None:
            async with self.sessionmaker() as session:
                service = SeasonService(SeasonRepository(session=session))
                active = await service.create_season(self._payload(2025))
                await service.activate_season(active.id)
                with self.assertRaises(SeasonInUseError):
                    await service.delete_season(active.id)

                referenced = await service.create_season(self._payload(2024))
                session.add(
                    TeeTimeTemplate(
                        season_id=referenced.id,
                        day_of_week=5,
                        time_slots=["15:30"],
                        max_slots_per_time=4,
                        booking_opens_days_before=7,
                        booking_opens_time="21:00",
                        booking_closes_days_before=2,
                        booking_closes_time="18:00",
                        timezone="America/New_York",
                    )
                )
                await session.commit()
                with self.assertRaises(SeasonInUseError) as ctx:
                    await service.delete_season(referenced.id)
                self.assertEqual(ctx.exception.details, {"dependents": 1})

                empty = await service.create_season(self._payload(2023))
                await service.delete_season(empty.id)
                with self.assertRaises(NotFoundError):
                    await service.get_season(empty.id)

        asyncio.run(_run())


if __name__ == "__main__":
    unittest.main()
