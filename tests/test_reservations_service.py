from __future__ import annotations

import asyncio
import sys
import tempfile
import unittest
from datetime import date, datetime, time, timedelta
from pathlib import Path
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from api.db.enums import TeeTimeOrigin
from api.db.models import Season, TeeTime, User
from api.modules.reservations.repository import ReservationRepository
from api.modules.reservations.service import ReservationService, clean_player_names
from api.modules.tee_times.repository import TeeTimeRepository
from league.errors import (
    CapacityError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
    WindowClosedError,
)

OPENS_AT = datetime(2025, 5, 17, 1, 0)
CLOSES_AT = datetime(2025, 5, 21, 22, 0)
INSIDE_WINDOW = datetime(2025, 5, 19, 12, 0)


class TestReservationService(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.tmpdir = tempfile.TemporaryDirectory()
        db_path = Path(cls.tmpdir.name) / "reservations_service.db"
        cls.engine = create_async_engine(
            f"sqlite+aiosqlite:///{db_path}",
            echo=False,
            connect_args={"timeout": 30},
        )
        cls.sessionmaker = async_sessionmaker(
            bind=cls.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        cls.next_day = date(2025, 5, 23)

        async def _init_db() -> None:
            async with cls.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            async with cls.sessionmaker() as session:
                season = Season(
                    year=2025,
                    name="2025 League",
                    start_date=date(2025, 5, 1),
                    end_date=date(2025, 9, 30),
                    is_active=True,
                )
                session.add(season)
                await session.commit()
                cls.season_id = season.id

        asyncio.run(_init_db())

    @classmethod
    def tearDownClass(cls) -> None:
        async def _dispose() -> None:
            await cls.engine.dispose()

        asyncio.run(_dispose())
        cls.tmpdir.cleanup()

    def _service(self, session: AsyncSession, now: datetime = INSIDE_WINDOW) -> ReservationService:
        return ReservationService(
            repository=ReservationRepository(session=session),
            tee_time_repository=TeeTimeRepository(session=session),
            clock=lambda: now,
        )

    async def _create_user(self, name: str) -> UUID:
        async with self.sessionmaker() as session:
            user = User(username=f"{name.lower()}-{uuid4().hex[:8]}", name=name)
            session.add(user)
            await session.commit()
            return user.id

    async def _create_tee_time(self, *, max_slots: int = 4, is_available: bool = True) -> UUID:
        # Each tee time gets its own date so (date, time) never collides.
        play_date = type(self).next_day
        type(self).next_day = play_date + timedelta(days=1)
        async with self.sessionmaker() as session:
            tee_time = TeeTime(
                season_id=self.season_id,
                origin=TeeTimeOrigin.MANUAL,
                date=play_date,
                time=time(15, 30),
                max_slots=max_slots,
                booking_opens_at=OPENS_AT,
                booking_closes_at=CLOSES_AT,
                is_available=is_available,
            )
            session.add(tee_time)
            await session.commit()
            return tee_time.id

    async def _reserved(self, tee_time_id: UUID) -> int:
        async with self.sessionmaker() as session:
            return await ReservationRepository(session=session).sum_slots(tee_time_id)

    async def _reserve(
        self,
        tee_time_id: UUID,
        user_id: UUID,
        slots: int,
        now: datetime = INSIDE_WINDOW,
    ):
        async with self.sessionmaker() as session:
            return await self._service(session, now).reserve(
                tee_time_id=tee_time_id,
                user_id=user_id,
                slots=slots,
                player_names=[f"Guest {index}" for index in range(1, slots)],
                play_for_money=[False] * slots,
            )

    def test_reserve_inside_window_books_seats(self) -> None:
        async def _run() -> None:
            user_id = await self._create_user("Dana")
            tee_time_id = await self._create_tee_time()

            reservation = await self._reserve(tee_time_id, user_id, 3)

            self.assertEqual(reservation.slots, 3)
            self.assertEqual(reservation.player_names, ["Guest 1", "Guest 2"])
            self.assertEqual(await self._reserved(tee_time_id), 3)

            with self.assertRaises(CapacityError) as ctx:
                await self._reserve(tee_time_id, user_id, 2)
            self.assertEqual(ctx.exception.details, {"available_slots": 1})

        asyncio.run(_run())

    def test_window_is_enforced_at_both_edges(self) -> None:
        async def _run() -> None:
            user_id = await self._create_user("Eli")
            tee_time_id = await self._create_tee_time()

            with self.assertRaises(WindowClosedError) as early:
                await self._reserve(tee_time_id, user_id, 1, now=OPENS_AT - timedelta(seconds=1))
            self.assertEqual(early.exception.details["window_status"], "not-yet-open")

            with self.assertRaises(WindowClosedError) as late:
                await self._reserve(tee_time_id, user_id, 1, now=CLOSES_AT + timedelta(seconds=1))
            self.assertEqual(late.exception.details["window_status"], "closed")

            await self._reserve(tee_time_id, user_id, 1, now=OPENS_AT)
            await self._reserve(tee_time_id, user_id, 1, now=CLOSES_AT)
            self.assertEqual(await self._reserved(tee_time_id), 2)

        asyncio.run(_run())

    def test_disabled_tee_time_rejects_members(self) -> None:
        async def _run() -> None:
            user_id = await self._create_user("Fay")
            tee_time_id = await self._create_tee_time(is_available=False)
            with self.assertRaises(WindowClosedError):
                await self._reserve(tee_time_id, user_id, 1)
            self.assertEqual(await self._reserved(tee_time_id), 0)

        asyncio.run(_run())

    def test_request_validation(self) -> None:
        async def _run() -> None:
            user_id = await self._create_user("Gus")
            tee_time_id = await self._create_tee_time(max_slots=2)

            with self.assertRaises(ValidationError):
                await self._reserve(tee_time_id, user_id, 0)
            with self.assertRaises(ValidationError) as ctx:
                await self._reserve(tee_time_id, user_id, 3)
            self.assertEqual(ctx.exception.details, {"max_slots": 2})

            async with self.sessionmaker() as session:
                service = self._service(session)
                with self.assertRaises(ValidationError):
                    await service.reserve(
                        tee_time_id=tee_time_id,
                        user_id=user_id,
                        slots=2,
                        player_names=["Guest"],
                        play_for_money=[True],
                    )
                with self.assertRaises(NotFoundError):
                    await service.reserve(
                        tee_time_id=uuid4(),
                        user_id=user_id,
                        slots=1,
                        player_names=[],
                        play_for_money=[False],
                    )
            self.assertEqual(await self._reserved(tee_time_id), 0)

        asyncio.run(_run())

    def test_clean_player_names(self) -> None:
        self.assertEqual(clean_player_names(["  Ann ", "Bo"], 3), ["Ann", "Bo"])
        self.assertEqual(clean_player_names([], 1), [])
        with self.assertRaises(ValidationError):
            clean_player_names(["Ann"], 3)
        with self.assertRaises(ValidationError):
            clean_player_names(["   "], 2)
        with self.assertRaises(ValidationError):
            clean_player_names(["x" * 101], 2)

    def test_concurrent_group_bookings_never_overbook(self) -> None:
        async def _run() -> None:
            first = await self._create_user("Hal")
            second = await self._create_user("Ivy")
            tee_time_id = await self._create_tee_time(max_slots=4)

            results = await asyncio.gather(
                self._reserve(tee_time_id, first, 3),
                self._reserve(tee_time_id, second, 3),
                return_exceptions=True,
            )

            successes = [item for item in results if not isinstance(item, BaseException)]
            failures = [item for item in results if isinstance(item, BaseException)]
            self.assertEqual(len(successes), 1)
            self.assertEqual(len(failures), 1)
            self.assertIsInstance(failures[0], CapacityError)
            self.assertEqual(await self._reserved(tee_time_id), 3)

        asyncio.run(_run())

    def test_concurrent_single_seat_bookings_fill_exactly(self) -> None:
        async def _run() -> None:
            users = [await self._create_user(f"Player{index}") for index in range(6)]
            tee_time_id = await self._create_tee_time(max_slots=4)

            results = await asyncio.gather(
                *(self._reserve(tee_time_id, user_id, 1) for user_id in users),
                return_exceptions=True,
            )

            failures = [item for item in results if isinstance(item, BaseException)]
            self.assertEqual(len(results) - len(failures), 4)
            self.assertEqual(len(failures), 2)
            for failure in failures:
                self.assertIsInstance(failure, CapacityError)
            self.assertEqual(await self._reserved(tee_time_id), 4)

        asyncio.run(_run())

    def test_cancel_frees_capacity(self) -> None:
        async def _run() -> None:
            owner = await self._create_user("Jo")
            other = await self._create_user("Kim")
            tee_time_id = await self._create_tee_time(max_slots=4)
            reservation = await self._reserve(tee_time_id, owner, 4)

            with self.assertRaises(CapacityError):
                await self._reserve(tee_time_id, other, 1)

            async with self.sessionmaker() as session:
                await self._service(session).cancel(reservation.id, owner)
            self.assertEqual(await self._reserved(tee_time_id), 0)

            await self._reserve(tee_time_id, other, 4)
            self.assertEqual(await self._reserved(tee_time_id), 4)

            async with self.sessionmaker() as session:
                with self.assertRaises(NotFoundError):
                    await self._service(session).cancel(reservation.id, owner)

        asyncio.run(_run())

    def test_only_owner_or_admin_can_cancel(self) -> None:
        async def _run() -> None:
            owner = await self._create_user("Lou")
            stranger = await self._create_user("Max")
            admin = await self._create_user("Ned")
            tee_time_id = await self._create_tee_time()
            reservation = await self._reserve(tee_time_id, owner, 2)

            async with self.sessionmaker() as session:
                with self.assertRaises(ForbiddenError):
                    await self._service(session).cancel(reservation.id, stranger)
            self.assertEqual(await self._reserved(tee_time_id), 2)

            async with self.sessionmaker() as session:
                await self._service(session).cancel(reservation.id, admin, is_admin=True)
            self.assertEqual(await self._reserved(tee_time_id), 0)

        asyncio.run(_run())

    def test_admin_booking_skips_window_but_not_capacity(self) -> None:
        async def _run() -> None:
            member = await self._create_user("Oda")
            tee_time_id = await self._create_tee_time(max_slots=2, is_available=False)
            after_close = CLOSES_AT + timedelta(days=1)

            async with self.sessionmaker() as session:
                service = self._service(session, after_close)
                reservation = await service.reserve_for_member(
                    tee_time_id=tee_time_id,
                    user_id=member,
                    slots=2,
                    player_names=["Guest"],
                    play_for_money=[True, False],
                )
            self.assertEqual(reservation.user_id, member)
            self.assertEqual(reservation.play_for_money, [True, False])

            async with self.sessionmaker() as session:
                service = self._service(session, after_close)
                with self.assertRaises(CapacityError):
                    await service.reserve_for_member(
                        tee_time_id=tee_time_id,
                        user_id=member,
                        slots=1,
                        player_names=[],
                        play_for_money=[False],
                    )
                with self.assertRaises(NotFoundError):
                    await service.reserve_for_member(
                        tee_time_id=tee_time_id,
                        user_id=uuid4(),
                        slots=1,
                        player_names=[],
                        play_for_money=[False],
                    )
            self.assertEqual(await self._reserved(tee_time_id), 2)

        asyncio.run(_run())

    def test_member_listing_filters_past_dates(self) -> None:
        async def _run() -> None:
            member = await self._create_user("Pat")
            tee_time_id = await self._create_tee_time()
            await self._reserve(tee_time_id, member, 1)

            async with self.sessionmaker() as session:
                upcoming = await self._service(session).list_my_reservations(member)
                self.assertEqual(len(upcoming), 1)
                self.assertEqual(upcoming[0].time, "15:30")
                self.assertEqual(upcoming[0].member_name, "Pat")

                much_later = self._service(session, datetime(2026, 1, 1))
                self.assertEqual(await much_later.list_my_reservations(member), [])
                everything = await much_later.list_my_reservations(member, upcoming_only=False)
                self.assertEqual(len(everything), 1)

        asyncio.run(_run())


if __name__ == "__main__":
    unittest.main()
