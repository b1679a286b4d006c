from __future__ import annotations

import sys
import unittest
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from league.availability import WindowStatus, compute_availability, window_status

OPENS = datetime(2025, 5, 17, 1, 0)
CLOSES = datetime(2025, 5, 21, 22, 0)


def _availability(**overrides: object):
    values: dict[str, object] = {
        "max_slots": 4,
        "reserved_slots": 0,
        "booking_opens_at": OPENS,
        "booking_closes_at": CLOSES,
        "is_available": True,
        "now": datetime(2025, 5, 19, 12, 0),
    }
    values.update(overrides)
    return compute_availability(**values)  # type: ignore[arg-type]


class TestWindowStatus(unittest.TestCase):
    def test_boundaries_are_inclusive(self) -> None:
        self.assertEqual(window_status(OPENS, OPENS, CLOSES), WindowStatus.OPEN)
        self.assertEqual(window_status(CLOSES, OPENS, CLOSES), WindowStatus.OPEN)

    def test_outside_window(self) -> None:
        one_second = timedelta(seconds=1)
        self.assertEqual(
            window_status(OPENS - one_second, OPENS, CLOSES), WindowStatus.NOT_YET_OPEN
        )
        self.assertEqual(window_status(CLOSES + one_second, OPENS, CLOSES), WindowStatus.CLOSED)


class TestComputeAvailability(unittest.TestCase):
    def test_open_with_room_is_bookable(self) -> None:
        result = _availability(reserved_slots=3)
        self.assertEqual(result.available_slots, 1)
        self.assertEqual(result.window_status, WindowStatus.OPEN)
        self.assertTrue(result.bookable)

    def test_full_tee_time_is_not_bookable(self) -> None:
        result = _availability(reserved_slots=4)
        self.assertEqual(result.available_slots, 0)
        self.assertFalse(result.bookable)

    def test_overbooked_after_capacity_drop_clamps_to_zero(self) -> None:
        result = _availability(max_slots=2, reserved_slots=3)
        self.assertEqual(result.available_slots, 0)
        self.assertEqual(result.reserved_slots, 3)
        self.assertFalse(result.bookable)

    def test_admin_disabled_tee_time_is_not_bookable(self) -> None:
        result = _availability(is_available=False)
        self.assertEqual(result.available_slots, 4)
        self.assertFalse(result.is_available)
        self.assertFalse(result.bookable)

    def test_closed_window_is_not_bookable(self) -> None:
        result = _availability(now=CLOSES + timedelta(minutes=1))
        self.assertEqual(result.window_status, WindowStatus.CLOSED)
        self.assertFalse(result.bookable)

    def test_not_yet_open_is_not_bookable(self) -> None:
        result = _availability(now=OPENS - timedelta(minutes=1))
        self.assertEqual(result.window_status, WindowStatus.NOT_YET_OPEN)
        self.assertFalse(result.bookable)


if __name__ == "__main__":
    unittest.main()
