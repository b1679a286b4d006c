from __future__ import annotations

import sys
import unittest
from datetime import date, datetime, time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from league.errors import ConflictError, ValidationError
from league.schedule import (
    BookingRule,
    dates_for_weekday,
    expand_template,
    league_weekday,
    normalize_time_slots,
    parse_clock,
    validate_window_offsets,
)


def _friday_rule(**overrides: object) -> BookingRule:
    values: dict[str, object] = {
        "day_of_week": 5,
        "time_slots": (time(15, 30), time(15, 40)),
        "max_slots": 4,
        "opens_days_before": 7,
        "opens_time": time(21, 0),
        "closes_days_before": 2,
        "closes_time": time(18, 0),
        "timezone": "America/New_York",
    }
    values.update(overrides)
    return BookingRule(**values)  # type: ignore[arg-type]


class TestClockParsing(unittest.TestCase):
    def test_parse_accepts_24h_times(self) -> None:
        self.assertEqual(parse_clock("15:30"), time(15, 30))
        self.assertEqual(parse_clock(" 07:05 "), time(7, 5))
        self.assertEqual(parse_clock("23:59:30"), time(23, 59, 30))

    def test_parse_rejects_malformed_times(self) -> None:
        for raw in ("7:30", "24:00", "15:60", "noon", ""):
            with self.subTest(raw=raw), self.assertRaises(ValidationError):
                parse_clock(raw)

    def test_normalize_sorts_and_dedupes(self) -> None:
        slots = normalize_time_slots(["15:40", "15:30", "15:40"])
        self.assertEqual(slots, (time(15, 30), time(15, 40)))

    def test_normalize_rejects_empty_list(self) -> None:
        with self.assertRaises(ValidationError):
            normalize_time_slots([])


class TestWeekdays(unittest.TestCase):
    def test_sunday_is_zero(self) -> None:
        self.assertEqual(league_weekday(date(2025, 5, 25)), 0)
        self.assertEqual(league_weekday(date(2025, 5, 23)), 5)
        self.assertEqual(league_weekday(date(2025, 5, 24)), 6)

    def test_dates_for_weekday_includes_both_ends(self) -> None:
        fridays = dates_for_weekday(date(2025, 5, 2), date(2025, 5, 30), 5)
        self.assertEqual(
            fridays,
            [date(2025, 5, 2), date(2025, 5, 9), date(2025, 5, 16), date(2025, 5, 23), date(2025, 5, 30)],
        )

    def test_dates_for_weekday_empty_range(self) -> None:
        self.assertEqual(dates_for_weekday(date(2025, 5, 26), date(2025, 5, 29), 5), [])
        self.assertEqual(dates_for_weekday(date(2025, 6, 1), date(2025, 5, 1), 5), [])

    def test_dates_for_weekday_rejects_bad_day(self) -> None:
        with self.assertRaises(ValidationError):
            dates_for_weekday(date(2025, 5, 1), date(2025, 5, 31), 7)


class TestWindowOffsets(unittest.TestCase):
    def test_default_window_is_valid(self) -> None:
        validate_window_offsets(
            opens_days_before=7,
            opens_time=time(21, 0),
            closes_days_before=2,
            closes_time=time(18, 0),
        )

    def test_rejects_window_that_closes_before_it_opens(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_window_offsets(
                opens_days_before=1,
                opens_time=time(9, 0),
                closes_days_before=2,
                closes_time=time(18, 0),
            )
        self.assertEqual(ctx.exception.details["booking_closes_time"], "18:00")

    def test_rejects_zero_width_window(self) -> None:
        with self.assertRaises(ValidationError):
            validate_window_offsets(
                opens_days_before=2,
                opens_time=time(18, 0),
                closes_days_before=2,
                closes_time=time(18, 0),
            )

    def test_rejects_negative_offsets(self) -> None:
        with self.assertRaises(ValidationError):
            validate_window_offsets(
                opens_days_before=-1,
                opens_time=time(9, 0),
                closes_days_before=0,
                closes_time=time(8, 0),
            )


class TestExpandTemplate(unittest.TestCase):
    def test_expands_friday_slots_with_utc_window(self) -> None:
        planned = expand_template(_friday_rule(), date(2025, 5, 23), date(2025, 5, 29))

        self.assertEqual(len(planned), 2)
        self.assertEqual([slot.time for slot in planned], [time(15, 30), time(15, 40)])
        for slot in planned:
            self.assertEqual(slot.date, date(2025, 5, 23))
            self.assertEqual(slot.max_slots, 4)
            # 21:00 EDT on 2025-05-16 and 18:00 EDT on 2025-05-21.
            self.assertEqual(slot.booking_opens_at, datetime(2025, 5, 17, 1, 0))
            self.assertEqual(slot.booking_closes_at, datetime(2025, 5, 21, 22, 0))
            self.assertIsNone(slot.booking_opens_at.tzinfo)

    def test_season_end_date_is_a_play_date(self) -> None:
        planned = expand_template(_friday_rule(), date(2025, 5, 23), date(2025, 5, 30))

        self.assertEqual(len(planned), 4)
        self.assertEqual(
            [(slot.date, slot.time) for slot in planned],
            [
                (date(2025, 5, 23), time(15, 30)),
                (date(2025, 5, 23), time(15, 40)),
                (date(2025, 5, 30), time(15, 30)),
                (date(2025, 5, 30), time(15, 40)),
            ],
        )
        self.assertEqual(planned[-1].booking_opens_at, datetime(2025, 5, 24, 1, 0))
        self.assertEqual(planned[-1].booking_closes_at, datetime(2025, 5, 28, 22, 0))

    def test_window_follows_standard_time_offset(self) -> None:
        planned = expand_template(
            _friday_rule(time_slots=(time(9, 0),)), date(2025, 11, 14), date(2025, 11, 14)
        )
        self.assertEqual(len(planned), 1)
        # EST is UTC-5.
        self.assertEqual(planned[0].booking_opens_at, datetime(2025, 11, 8, 2, 0))
        self.assertEqual(planned[0].booking_closes_at, datetime(2025, 11, 12, 23, 0))

    def test_range_without_matching_weekday_plans_nothing(self) -> None:
        self.assertEqual(expand_template(_friday_rule(), date(2025, 5, 24), date(2025, 5, 29)), [])

    def test_dst_gap_reports_every_offending_date(self) -> None:
        rule = _friday_rule(
            day_of_week=1,
            time_slots=(time(8, 0),),
            opens_days_before=1,
            opens_time=time(2, 30),
            closes_days_before=1,
            closes_time=time(3, 0),
        )
        with self.assertRaises(ConflictError) as ctx:
            expand_template(rule, date(2025, 3, 1), date(2025, 3, 20))
        self.assertEqual(ctx.exception.details, {"dates": ["2025-03-10"]})

    def test_unknown_timezone_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            expand_template(_friday_rule(timezone="Mars/Olympus"), date(2025, 5, 23), date(2025, 5, 29))


if __name__ == "__main__":
    unittest.main()
