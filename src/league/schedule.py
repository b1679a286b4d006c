from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from league.errors import ConflictError, ValidationError

_CLOCK_PATTERN = re.compile(r"^(?P<hour>[01]\d|2[0-3]):(?P<minute>[0-5]\d)(?::(?P<second>[0-5]\d))?$")
_SECONDS_PER_DAY = 24 * 60 * 60

# 0 = Sunday ... 6 = Saturday, matching how league admins configure play days.
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


@dataclass(frozen=True)
class BookingRule:
    """The part of a weekly template that drives slot expansion."""

    day_of_week: int
    time_slots: tuple[time, ...]
    max_slots: int
    opens_days_before: int
    opens_time: time
    closes_days_before: int
    closes_time: time
    timezone: str


@dataclass(frozen=True)
class PlannedTeeTime:
    date: date
    time: time
    max_slots: int
    booking_opens_at: datetime
    booking_closes_at: datetime


def parse_clock(value: str) -> time:
    match = _CLOCK_PATTERN.match(value.strip())
    if match is None:
        raise ValidationError(f"Invalid time '{value}'. Expected HH:MM (24h).")
    return time(
        hour=int(match.group("hour")),
        minute=int(match.group("minute")),
        second=int(match.group("second") or 0),
    )


def format_clock(value: time) -> str:
    return value.strftime("%H:%M")


def normalize_time_slots(values: Iterable[str]) -> tuple[time, ...]:
    parsed = {parse_clock(value) for value in values}
    if not parsed:
        raise ValidationError("time_slots must contain at least one time.")
    return tuple(sorted(parsed))


def resolve_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationError(f"Unknown timezone '{name}'.") from exc


def league_weekday(value: date) -> int:
    return (value.weekday() + 1) % 7


def dates_for_weekday(start: date, end: date, day_of_week: int) -> list[date]:
    if not 0 <= day_of_week <= 6:
        raise ValidationError("day_of_week must be between 0 (Sunday) and 6 (Saturday).")
    if start > end:
        return []
    first = start + timedelta(days=(day_of_week - league_weekday(start)) % 7)
    dates: list[date] = []
    current = first
    while current <= end:
        dates.append(current)
        current += timedelta(days=7)
    return dates


def local_to_utc(day: date, clock: time, zone: ZoneInfo) -> datetime:
    """Interpret ``day`` at ``clock`` in ``zone`` and return naive UTC."""
    local = datetime.combine(day, clock, tzinfo=zone)
    return local.astimezone(timezone.utc).replace(tzinfo=None)


def booking_window(play_date: date, rule: BookingRule, zone: ZoneInfo | None = None) -> tuple[datetime, datetime]:
    tz = zone or resolve_timezone(rule.timezone)
    opens_at = local_to_utc(play_date - timedelta(days=rule.opens_days_before), rule.opens_time, tz)
    closes_at = local_to_utc(play_date - timedelta(days=rule.closes_days_before), rule.closes_time, tz)
    return opens_at, closes_at


def _offset_seconds(days_before: int, clock: time) -> int:
    return -days_before * _SECONDS_PER_DAY + clock.hour * 3600 + clock.minute * 60 + clock.second


def validate_window_offsets(
    *,
    opens_days_before: int,
    opens_time: time,
    closes_days_before: int,
    closes_time: time,
) -> None:
    if opens_days_before < 0 or closes_days_before < 0:
        raise ValidationError("Booking window day offsets cannot be negative.")
    opens = _offset_seconds(opens_days_before, opens_time)
    closes = _offset_seconds(closes_days_before, closes_time)
    if opens >= closes:
        raise ValidationError(
            "Booking window is empty: booking must open strictly before it closes.",
            details={
                "booking_opens_days_before": opens_days_before,
                "booking_opens_time": format_clock(opens_time),
                "booking_closes_days_before": closes_days_before,
                "booking_closes_time": format_clock(closes_time),
            },
        )


def expand_template(rule: BookingRule, start: date, end: date) -> list[PlannedTeeTime]:
    """Expand a weekly rule over ``[start, end]`` into dated tee times.

    The whole expansion is computed before anything is persisted; if any date
    ends up with an empty or inverted booking window (DST shifts can cause
    this even for offsets that look valid) every offending date is reported
    and no slot is returned.
    """
    if not rule.time_slots:
        raise ValidationError("time_slots must contain at least one time.")
    if rule.max_slots < 1:
        raise ValidationError("max_slots must be at least 1.")
    zone = resolve_timezone(rule.timezone)

    planned: list[PlannedTeeTime] = []
    offending: list[date] = []
    for play_date in dates_for_weekday(start, end, rule.day_of_week):
        opens_at, closes_at = booking_window(play_date, rule, zone)
        if opens_at >= closes_at:
            offending.append(play_date)
            continue
        for slot in rule.time_slots:
            planned.append(
                PlannedTeeTime(
                    date=play_date,
                    time=slot,
                    max_slots=rule.max_slots,
                    booking_opens_at=opens_at,
                    booking_closes_at=closes_at,
                )
            )

    if offending:
        raise ConflictError(
            "Template booking window closes before it opens on "
            + ", ".join(day.isoformat() for day in offending)
            + ".",
            details={"dates": [day.isoformat() for day in offending]},
        )
    return planned
