from __future__ import annotations

import asyncio
import sys
import tempfile
import unittest
from datetime import date, datetime, time
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from api.db.models import Season, TeeTime


def _constraint_names(table_name: str) -> set[str]:
    constraints = SQLModel.metadata.tables[table_name].constraints
    return {getattr(constraint, "name", None) or "" for constraint in constraints}


class TestApiDbModels(unittest.TestCase):
    def test_expected_tables_are_registered(self) -> None:
        table_names = set(SQLModel.metadata.tables.keys())
        for name in (
            "user",
            "season",
            "teetimetemplate",
            "teetime",
            "reservation",
            "round",
            "score",
        ):
            self.assertIn(name, table_names)

    def test_users_have_handicap_and_admin_columns(self) -> None:
        users_table = SQLModel.metadata.tables["user"]
        self.assertIn("strokes_given", users_table.c)
        self.assertIn("is_admin", users_table.c)
        self.assertIn("name", users_table.c)

    def test_tee_time_is_unique_per_date_and_time(self) -> None:
        self.assertIn("uq_teetime_date_time", _constraint_names("teetime"))
        tee_time_table = SQLModel.metadata.tables["teetime"]
        for column in ("booking_opens_at", "booking_closes_at", "is_available", "lock_version"):
            self.assertIn(column, tee_time_table.c)
        self.assertTrue(tee_time_table.c.template_id.nullable)

    def test_one_score_per_player_per_round(self) -> None:
        self.assertIn("uq_score_round_user", _constraint_names("score"))
        score_table = SQLModel.metadata.tables["score"]
        for number in range(1, 19):
            self.assertIn(f"hole_{number}", score_table.c)
            self.assertIn(f"net_hole_{number}", score_table.c)
        self.assertIn("strokes_given", score_table.c)

    def test_season_year_is_unique(self) -> None:
        self.assertIn("uq_season_year", _constraint_names("season"))

    def test_naive_utc_timestamps_round_trip(self) -> None:
        async def _run() -> None:
            with tempfile.TemporaryDirectory() as tmpdir:
                engine = create_async_engine(f"sqlite+aiosqlite:///{Path(tmpdir) / 'models.db'}")
                try:
                    async with engine.begin() as conn:
                        await conn.run_sync(SQLModel.metadata.create_all)
                    sessionmaker = async_sessionmaker(
                        bind=engine, class_=AsyncSession, expire_on_commit=False
                    )
                    async with sessionmaker() as session:
                        season = Season(
                            year=2025,
                            name="2025 League",
                            start_date=date(2025, 5, 1),
                            end_date=date(2025, 9, 30),
                        )
                        session.add(season)
                        await session.flush()
                        tee_time = TeeTime(
                            season_id=season.id,
                            date=date(2025, 5, 23),
                            time=time(15, 30),
                            max_slots=4,
                            booking_opens_at=datetime(2025, 5, 17, 1, 0),
                            booking_closes_at=datetime(2025, 5, 21, 22, 0),
                        )
                        session.add(tee_time)
                        await session.commit()
                        tee_time_id = tee_time.id

                    async with sessionmaker() as session:
                        stored = await session.get(TeeTime, tee_time_id)
                        assert stored is not None
                        self.assertEqual(stored.booking_opens_at, datetime(2025, 5, 17, 1, 0))
                        self.assertIsNone(stored.booking_opens_at.tzinfo)
                        self.assertIsNone(stored.created_at.tzinfo)
                finally:
                    await engine.dispose()

        asyncio.run(_run())


if __name__ == "__main__":
    unittest.main()
